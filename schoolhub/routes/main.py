from flask import Blueprint, render_template, request, flash, redirect, url_for, current_app, send_from_directory, abort
from schoolhub.routes.api import requested_cities
from schoolhub.services.image_storage import ImageStorageError
from schoolhub.services.school_service import SchoolValidationError, create_school, list_schools, list_cities
from schoolhub.utils.school_validator import SchoolFormValidator

bp = Blueprint('main', __name__)

def render_school_form(**context):
    """Render the form with the image limits its script checks before upload."""
    return render_template(
        'add_school.html',
        max_image_bytes=current_app.config['MAX_IMAGE_BYTES'],
        allowed_types=current_app.config['ALLOWED_IMAGE_TYPES'],
        **context
    )

@bp.route('/')
def index():
    return render_template('index.html')

@bp.route('/add-school', methods=['GET', 'POST'])
def add_school():
    if request.method == 'POST':
        validator = SchoolFormValidator(
            max_image_bytes=current_app.config['MAX_IMAGE_BYTES'],
            allowed_types=current_app.config['ALLOWED_IMAGE_TYPES'],
        )
        is_valid, errors = validator.validate(request.form, request.files)
        if not is_valid:
            return render_school_form(form=request.form, errors=errors)

        try:
            create_school(request.form, request.files)
        except SchoolValidationError as e:
            status = {'type': 'error', 'message': str(e) or 'Something went wrong.'}
        except ImageStorageError as e:
            current_app.logger.error(f"Error saving school image: {str(e)}")
            status = {'type': 'error', 'message': 'Failed to save the image.'}
        except Exception as e:
            current_app.logger.error(f"Error adding school: {str(e)}")
            status = {'type': 'error', 'message': 'An error occurred while submitting the form.'}
        else:
            flash('School added successfully!', 'success')
            return redirect(url_for('main.add_school'))

        return render_school_form(form=request.form, errors={}, status=status)

    return render_school_form(form={}, errors={})

@bp.route('/schools')
def schools():
    search = request.args.get('search', '').strip()
    selected_cities = [city.strip() for city in requested_cities(request.args) if city.strip()]

    schools, cities, error = [], [], None
    try:
        schools = list_schools(search, selected_cities)
        cities = list_cities()
    except Exception as e:
        current_app.logger.error(f"Error loading schools page: {str(e)}")
        error = 'Internal server error'

    return render_template(
        'schools.html',
        schools=schools,
        cities=sorted(set(cities) | set(selected_cities)),
        search=search,
        selected_cities=selected_cities,
        error=error,
        base_url=current_app.config.get('BASE_URL', ''),
        debounce_ms=current_app.config.get('SEARCH_DEBOUNCE_MS', 300),
    )

@bp.route('/schoolimage/<path:filename>')
def school_image(filename):
    # Staged uploads are hidden files and never served
    if filename.startswith('.'):
        abort(404)
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
