import math
import os
import re
from typing import Dict, Tuple

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

class SchoolFormValidator:
    REQUIRED_TEXT_FIELDS = {
        'name': 'School name is required',
        'address': 'Address is required',
        'city': 'City is required',
        'state': 'State is required',
    }
    MIN_CONTACT = 1000000000

    def __init__(self, max_image_bytes=5000000, allowed_types=('image/jpeg', 'image/png', 'image/webp')):
        self.max_image_bytes = max_image_bytes
        self.allowed_types = tuple(allowed_types)

    def check_contact(self, value) -> bool:
        """Coerce the contact to a number; ten digits or more passes."""
        try:
            number = float(str(value).strip() or 0)
        except ValueError:
            return False
        return math.isfinite(number) and number >= self.MIN_CONTACT

    def check_email(self, value) -> bool:
        return bool(value) and EMAIL_PATTERN.match(value.strip()) is not None

    def image_size(self, file) -> int:
        stream = file.stream
        position = stream.tell()
        stream.seek(0, os.SEEK_END)
        size = stream.tell()
        stream.seek(position)
        return size

    def check_image(self, file) -> str:
        """Return the first problem with the upload, or an empty string."""
        if file is None or not file.filename:
            return 'Image is required.'
        if self.image_size(file) > self.max_image_bytes:
            return f'Max file size is {self.max_image_bytes / 1000000:g}MB.'
        if file.mimetype not in self.allowed_types:
            return 'Only .jpg, .jpeg, .png and .webp formats are supported.'
        return ''

    def validate(self, form, files) -> Tuple[bool, Dict[str, str]]:
        """Validate a submission and return (is_valid, errors by field)."""
        errors = {}

        for field, message in self.REQUIRED_TEXT_FIELDS.items():
            if not (form.get(field) or '').strip():
                errors[field] = message

        if not self.check_contact(form.get('contact', '')):
            errors['contact'] = 'Contact must be a 10-digit number'

        if not self.check_email(form.get('email_id') or form.get('email') or ''):
            errors['email_id'] = 'Invalid email address'

        image_problem = self.check_image(files.get('image'))
        if image_problem:
            errors['image'] = image_problem

        return len(errors) == 0, errors
