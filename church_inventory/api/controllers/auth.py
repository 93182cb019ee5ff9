"""
Auth Controller - relays sign-in and magic-link requests to the auth provider
"""

from flask import Blueprint, request, jsonify
from church_inventory.api.dependencies import get_auth_client
from church_inventory.utils.exceptions import AuthServiceError
import logging

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__)


def _json_body():
    """Request JSON as a dict; anything else counts as an empty body"""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _bearer_token():
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


@auth_bp.route('/api/signin', methods=['POST'])
def signin():
    """Email + password sign-in"""
    body = _json_body()
    email = body.get('email')
    password = body.get('password')
    if not email or not password:
        return jsonify({'error': 'email and password required'}), 400

    try:
        result = get_auth_client().sign_in_with_password(email, password)
        return jsonify(result), 200
    except AuthServiceError as e:
        return jsonify({'error': e.message}), 401
    except Exception as e:
        logger.error(f"Error signing in: {e}", exc_info=True)
        return jsonify({'error': 'internal error'}), 500


@auth_bp.route('/api/magic-link', methods=['POST'])
def magic_link():
    """Email a one-time sign-in link"""
    body = _json_body()
    email = body.get('email')
    if not email:
        return jsonify({'error': 'email required'}), 400

    try:
        result = get_auth_client().sign_in_with_otp(email)
        return jsonify(result), 200
    except AuthServiceError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        logger.error(f"Error sending magic link: {e}", exc_info=True)
        return jsonify({'error': 'internal error'}), 500


@auth_bp.route('/api/session', methods=['GET'])
def session():
    """Resolve the user behind the caller's access token"""
    token = _bearer_token()
    if not token:
        return jsonify({'error': 'access token required'}), 401

    try:
        user = get_auth_client().get_user(token)
        return jsonify({'user': user}), 200
    except AuthServiceError as e:
        return jsonify({'error': e.message}), 401
    except Exception as e:
        logger.error(f"Error retrieving session: {e}", exc_info=True)
        return jsonify({'error': 'internal error'}), 500


@auth_bp.route('/api/signout', methods=['POST'])
def signout():
    """Revoke the caller's session"""
    token = _bearer_token()
    if not token:
        return jsonify({'error': 'access token required'}), 401

    try:
        get_auth_client().sign_out(token)
        return '', 204
    except AuthServiceError as e:
        return jsonify({'error': e.message}), 401
    except Exception as e:
        logger.error(f"Error signing out: {e}", exc_info=True)
        return jsonify({'error': 'internal error'}), 500
