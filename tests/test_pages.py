from conftest import count_schools, stored_files


def post_form(client, data, **kwargs):
    return client.post('/add-school', data=data, content_type='multipart/form-data', **kwargs)


def test_landing_page_links_to_both_pages(client):
    response = client.get('/')

    assert response.status_code == 200
    assert b'Add a New School' in response.data
    assert b'View All Schools' in response.data


def test_add_school_form_renders(client):
    response = client.get('/add-school')

    assert response.status_code == 200
    assert b'name="email_id"' in response.data
    assert b'enctype="multipart/form-data"' in response.data


def test_valid_form_adds_school_and_resets(app, client, school_form):
    response = post_form(client, school_form(), follow_redirects=True)

    assert response.status_code == 200
    assert b'School added successfully!' in response.data
    assert b'value="Oak School"' not in response.data
    assert count_schools(app) == 1
    assert len(stored_files(app)) == 1


def test_invalid_fields_are_reported_inline(app, client, school_form):
    response = post_form(client, school_form(contact='12345', email_id='nope'))

    assert response.status_code == 200
    assert b'Contact must be a 10-digit number' in response.data
    assert b'Invalid email address' in response.data
    # Entered values are kept
    assert b'value="Oak School"' in response.data
    assert count_schools(app) == 0


def test_wrong_image_type_never_reaches_disk(app, client, school_form, make_image):
    data = school_form(image=make_image(filename='notes.txt', content_type='text/plain'))

    response = post_form(client, data)

    assert b'Only .jpg, .jpeg, .png and .webp formats are supported.' in response.data
    assert count_schools(app) == 0
    assert stored_files(app) == []


def test_oversized_image_never_reaches_disk(app, client, school_form, make_image):
    app.config['MAX_IMAGE_BYTES'] = 16
    data = school_form(image=make_image(content=b'\x00' * 17))

    response = post_form(client, data)

    assert b'Max file size is' in response.data
    assert count_schools(app) == 0
    assert stored_files(app) == []


def test_storage_failure_shows_error_banner(app, client, school_form, monkeypatch):
    def failing_create(form, files):
        raise RuntimeError('boom')

    monkeypatch.setattr('schoolhub.routes.main.create_school', failing_create)

    response = post_form(client, school_form())

    assert response.status_code == 200
    assert b'An error occurred while submitting the form.' in response.data


def test_schools_page_lists_records(client, add_rows):
    add_rows(
        {'name': 'Oak School', 'address': '1 Main St', 'city': 'Rajkot'},
        {'name': 'Pine Academy', 'address': '22 Oak Road', 'city': 'Vadodara'},
    )

    response = client.get('/schools')

    assert response.status_code == 200
    assert b'Oak School' in response.data
    assert b'Pine Academy' in response.data
    assert b'value="Rajkot"' in response.data
    assert b'value="Vadodara"' in response.data
    assert b'data-debounce-ms="300"' in response.data


def test_schools_page_applies_filters(client, add_rows):
    add_rows(
        {'name': 'Oak School', 'address': '1 Main St', 'city': 'Rajkot'},
        {'name': 'Maple High', 'address': '5 Lake View', 'city': 'Surat'},
    )

    response = client.get('/schools?search=maple&city=Surat')

    assert b'Maple High' in response.data
    assert b'Oak School' not in response.data
    assert b'value="Surat" checked' in response.data


def test_schools_page_empty_state(client):
    response = client.get('/schools?search=nothing')

    assert response.status_code == 200
    assert b'No schools found.' in response.data
    assert b'Clear filters' in response.data


def test_schools_page_error_state_offers_retry(client, monkeypatch):
    def failing_list(*args, **kwargs):
        raise RuntimeError('database down')

    monkeypatch.setattr('schoolhub.routes.main.list_schools', failing_list)

    response = client.get('/schools')

    assert response.status_code == 200
    assert b'Internal server error' in response.data
    assert b'Retry' in response.data


def test_staged_uploads_are_not_served(app, client):
    hidden = app.config['UPLOAD_FOLDER'] + '/.123_x.png.part'
    with open(hidden, 'wb') as f:
        f.write(b'partial')

    assert client.get('/schoolimage/.123_x.png.part').status_code == 404


def test_unknown_page_renders_404(client):
    response = client.get('/nowhere')

    assert response.status_code == 404
    assert b'Page not found' in response.data


def test_init_db_command(app):
    result = app.test_cli_runner().invoke(args=['init-db'])

    assert result.exit_code == 0
    assert 'schools table ready' in result.output


def test_form_carries_image_limits_for_its_script(app, client):
    app.config['MAX_IMAGE_BYTES'] = 2000000

    response = client.get('/add-school')

    assert b'data-max-image-bytes="2000000"' in response.data
    assert b'data-allowed-types="image/jpeg,image/png,image/webp"' in response.data
    assert b'js/add_school.js' in response.data


def test_form_script_checks_image_before_upload(client):
    response = client.get('/static/js/add_school.js')

    assert response.status_code == 200
    script = response.get_data(as_text=True)
    assert 'event.preventDefault()' in script
    assert 'file.size > maxBytes' in script
    assert 'allowedTypes.indexOf(file.type)' in script
    response.close()


def test_listing_script_ignores_stale_responses(client):
    response = client.get('/static/js/schools.js')

    script = response.get_data(as_text=True)
    assert 'var requestId = ++latestRequest;' in script
    assert script.count('if (requestId !== latestRequest)') == 3
    response.close()
