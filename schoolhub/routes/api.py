from flask import Blueprint, request, jsonify, current_app
from schoolhub.services.image_storage import ImageStorageError
from schoolhub.services.school_service import SchoolValidationError, create_school, list_schools

bp = Blueprint('api', __name__, url_prefix='/api')

def requested_cities(args):
    """City filter values; both ``city`` and ``city[]`` repeat."""
    return args.getlist('city') + args.getlist('city[]')

@bp.route('/add-schools', methods=['POST'])
def add_schools():
    try:
        school_id = create_school(request.form, request.files)
    except SchoolValidationError as e:
        current_app.logger.warning(f"Rejected school submission: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 400
    except ImageStorageError as e:
        current_app.logger.error(f"Error saving school image: {str(e)}")
        return jsonify({'success': False, 'error': 'Failed to save the image.'}), 500
    except Exception as e:
        current_app.logger.error(f"Error adding school: {str(e)}")
        return jsonify({'success': False, 'error': 'An error occurred on the server.'}), 500

    return jsonify({'success': True, 'message': 'School added successfully.', 'id': school_id})

@bp.route('/get-schools')
def get_schools():
    try:
        schools = list_schools(request.args.get('search'), requested_cities(request.args))
    except Exception as e:
        current_app.logger.error(f"Error fetching schools: {str(e)}")
        return jsonify({'error': 'An error occurred while fetching schools.', 'details': str(e)}), 500

    return jsonify({'schools': schools})
