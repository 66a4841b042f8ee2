import logging

from flask import (Blueprint, abort, current_app, flash, redirect, render_template,
                   request, send_from_directory, url_for)

from passport_registry.errors import PassportError
from passport_registry.models.entities.passport import Passport

logger = logging.getLogger(__name__)

passports_bp = Blueprint('passports', __name__)


def _empty_form():
    form_data = {key: '' for key in Passport.FIELDS}
    form_data['photo'] = None
    return form_data


# --- Home: the list is the default view ---
@passports_bp.route('/')
def home():
    return redirect(url_for('passports.list_passports'))


# --- List & Search ---
@passports_bp.route('/passports')
def list_passports():
    search_term = request.args.get('q', '')
    error = None
    try:
        passports = current_app.passport_service.list_passports(search_term)
    except PassportError as e:
        logger.error("Error fetching passports: %s", e)
        error = e.message
        passports = []

    return render_template('passports/list.html',
                           passports=passports,
                           search_term=search_term,
                           error=error)


# --- Create ---
@passports_bp.route('/passports/new', methods=['GET', 'POST'])
def create_passport():
    service = current_app.passport_service

    if request.method == 'GET':
        return render_template('passports/form.html', form_data=_empty_form())

    form_data = {key: request.form.get(key, '') for key in Passport.FIELDS}
    # URL of a photo uploaded by a previous (failed) submit
    form_data['photo'] = request.form.get('photo') or None

    upload = request.files.get('photo_file')
    if upload and upload.filename:
        try:
            form_data['photo'] = service.upload_photo(upload)
            flash('Photo téléchargée avec succès!', 'success')
        except PassportError as e:
            logger.error("Error uploading file: %s", e)
            flash('Erreur lors du téléchargement de la photo', 'danger')
            return render_template('passports/form.html', form_data=form_data), 400

    try:
        service.create_passport(form_data)
    except PassportError as e:
        logger.error("Error creating passport: %s", e)
        flash(e.message, 'danger')
        return render_template('passports/form.html', form_data=form_data), e.status_code

    flash('Passeport enregistré avec succès!', 'success')
    return redirect(url_for('passports.create_passport'))


# --- View ---
@passports_bp.route('/passports/<passport_id>')
def view_passport(passport_id):
    try:
        passport = current_app.passport_service.get_passport(passport_id)
    except PassportError as e:
        flash(e.message, 'danger')
        return redirect(url_for('passports.list_passports'))

    return render_template('passports/view.html', passport=passport)


# --- Edit ---
@passports_bp.route('/passports/<passport_id>/edit', methods=['GET', 'POST'])
def edit_passport(passport_id):
    service = current_app.passport_service
    try:
        passport = service.get_passport(passport_id)
    except PassportError as e:
        flash(e.message, 'danger')
        return redirect(url_for('passports.list_passports'))

    if request.method == 'GET':
        return render_template('passports/edit.html', passport=passport)

    patch = {key: request.form.get(key, '') for key in Passport.EDIT_FORM_FIELDS}
    try:
        service.update_passport(passport_id, patch)
    except PassportError as e:
        logger.error("Error updating passport %s: %s", passport_id, e)
        flash(e.message, 'danger')
        # Keep what the user typed in the form
        for key, value in patch.items():
            setattr(passport, key, value)
        return render_template('passports/edit.html', passport=passport), e.status_code

    flash('Passeport mis à jour avec succès!', 'success')
    return redirect(url_for('passports.list_passports'))


# --- Delete ---
@passports_bp.route('/passports/<passport_id>/delete', methods=['POST'])
def delete_passport(passport_id):
    try:
        current_app.passport_service.delete_passport(passport_id)
        flash('Passeport supprimé.', 'info')
    except PassportError as e:
        logger.error("Error deleting passport %s: %s", passport_id, e)
        flash(e.message, 'danger')

    return redirect(url_for('passports.list_passports', q=request.form.get('q') or None))


# --- Photo bucket ---
@passports_bp.route('/photos/<path:filename>')
def photo(filename):
    storage = current_app.passport_service.photo_storage
    if not storage.exists(filename):
        abort(404)
    return send_from_directory(storage.bucket_path, filename, max_age=3600)
