from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import HTTPException
from extensions import db
from utils.errors import WalletServiceError, InternalError
from utils.wallet_service import WalletService
from utils.wallet_store import WalletStore

wallet_bp = Blueprint('wallet', __name__, url_prefix='/wallet')


def get_json_body():
    # 非对象的 JSON（数组、字符串、数字）按空请求体处理
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def get_wallet_service():
    chain_reader = current_app.extensions['chain_reader']
    return WalletService(WalletStore(db.session), chain_reader)


@wallet_bp.errorhandler(WalletServiceError)
def handle_wallet_error(error):
    if isinstance(error, InternalError):
        current_app.logger.error(f"{request.method} {request.path} failed: {error.message}", exc_info=error)
        db.session.rollback()
    else:
        current_app.logger.warning(f"{request.method} {request.path} -> {error.status_code}: {error.message}")
    return jsonify(error.payload()), error.status_code


@wallet_bp.errorhandler(Exception)
def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return error
    current_app.logger.exception(f"{request.method} {request.path} unexpected error: {error}")
    db.session.rollback()
    return jsonify({'error': 'Internal server error'}), 500


@wallet_bp.route('/connect', methods=['POST'])
def connect_wallet():
    data = get_json_body()
    result = get_wallet_service().connect(
        data.get('walletAddress'),
        data.get('referralCode'),
    )
    return jsonify(result)


@wallet_bp.route('/approve', methods=['POST'])
def store_approval():
    data = get_json_body()
    result = get_wallet_service().approve(
        data.get('walletAddress'),
        data.get('tokenAddress'),
        data.get('approvedAmount'),
        data.get('transactionHash'),
    )
    return jsonify(result)


@wallet_bp.route('/balances', methods=['POST'])
def get_balances():
    data = get_json_body()
    wallets = get_wallet_service().balances(data.get('walletAddresses'))
    return jsonify({'wallets': wallets})


@wallet_bp.route('/referral/store', methods=['POST'])
def store_referral():
    data = get_json_body()
    result = get_wallet_service().store_referral(
        data.get('walletAddress'),
        data.get('referralCode'),
    )
    return jsonify(result)


@wallet_bp.route('/referral/verify', methods=['GET'])
def verify_referral():
    referral_code = request.args.get('referralCode')
    result = get_wallet_service().verify_referral(referral_code)
    return jsonify(result)
