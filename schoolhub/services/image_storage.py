import os
import tempfile
import time
from contextlib import suppress
from werkzeug.utils import secure_filename


class ImageStorageError(Exception):
    """Writing or moving an uploaded image failed."""


class StoredImage:
    def __init__(self, filename, public_path, staged_path, final_path):
        self.filename = filename
        self.public_path = public_path
        self.staged_path = staged_path
        self.final_path = final_path
        # Set once commit_image has put the file under its final name
        self.committed = False

    def __repr__(self):
        return f'<StoredImage {self.filename} committed={self.committed}>'


def _image_filename(millis, original_name):
    safe_name = secure_filename((original_name or '').replace(' ', '_')) or 'image'
    return f"{millis}_{safe_name}"


def build_image_filename(original_name, now=None):
    """``<epoch milliseconds>_<original name>`` with spaces turned into underscores."""
    if now is None:
        now = time.time()
    return _image_filename(int(now * 1000), original_name)


def stage_image(file, folder, url_prefix='/schoolimage', now=None):
    """Write an upload to a uniquely named hidden file inside ``folder``.

    The final name is the first ``<millis>_<name>`` not already taken in
    ``folder``. Nothing appears under it until ``commit_image`` runs.
    """
    if now is None:
        now = time.time()

    staged_path = None
    try:
        os.makedirs(folder, exist_ok=True)
        fd, staged_path = tempfile.mkstemp(dir=folder, prefix='.', suffix='.part')
        with os.fdopen(fd, 'wb') as out:
            file.stream.seek(0)
            file.save(out)
    except OSError as e:
        if staged_path:
            with suppress(OSError):
                os.remove(staged_path)
        raise ImageStorageError(str(e)) from e

    millis = int(now * 1000)
    filename = _image_filename(millis, file.filename)
    while os.path.exists(os.path.join(folder, filename)):
        millis += 1
        filename = _image_filename(millis, file.filename)

    return StoredImage(
        filename,
        f"{url_prefix.rstrip('/')}/{filename}",
        staged_path,
        os.path.join(folder, filename),
    )


def commit_image(image):
    """Give the staged file its final name. An existing file is never replaced."""
    try:
        os.link(image.staged_path, image.final_path)
    except OSError as e:
        raise ImageStorageError(str(e)) from e
    image.committed = True

    with suppress(OSError):
        os.remove(image.staged_path)


def discard_image(image):
    """Remove whatever this upload wrote. Files of other uploads are left alone."""
    paths = [image.staged_path]
    if image.committed:
        paths.append(image.final_path)

    for path in paths:
        with suppress(OSError):
            os.remove(path)
