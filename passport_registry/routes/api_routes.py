"""
JSON API over the same service layer as the HTML pages.
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from passport_registry.errors import PassportError, ValidationError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


@api_bp.errorhandler(PassportError)
def handle_passport_error(error):
    return jsonify({'error': error.message}), error.status_code


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Corps JSON invalide")
    return data


@api_bp.route('/passports', methods=['GET'])
def list_passports():
    passports = current_app.passport_service.list_passports(request.args.get('q', ''))
    return jsonify([p.to_dict() for p in passports])


@api_bp.route('/passports/<passport_id>', methods=['GET'])
def get_passport(passport_id):
    return jsonify(current_app.passport_service.get_passport(passport_id).to_dict())


@api_bp.route('/passports', methods=['POST'])
def create_passport():
    passport = current_app.passport_service.create_passport(_json_body())
    return jsonify(passport.to_dict()), 201


@api_bp.route('/passports/<passport_id>', methods=['PATCH'])
def update_passport(passport_id):
    passport = current_app.passport_service.update_passport(passport_id, _json_body())
    return jsonify(passport.to_dict())


@api_bp.route('/passports/<passport_id>', methods=['DELETE'])
def delete_passport(passport_id):
    current_app.passport_service.delete_passport(passport_id)
    return '', 204


@api_bp.route('/photos', methods=['POST'])
def upload_photo():
    public_url = current_app.passport_service.upload_photo(request.files.get('file'))
    return jsonify({'publicUrl': public_url}), 201
