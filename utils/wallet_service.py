from flask import current_app
from utils.errors import ClientInputError, ConflictError, NotFoundError
from utils.validators import (
    is_valid_address,
    is_valid_tx_hash,
    is_valid_amount,
    is_valid_referral_code,
    is_valid_address_list,
)

# 静态奖励描述，不依赖任何存储状态
REFERRAL_REWARD = {'type': 'discount', 'amount': '10%'}


class WalletService:
    """
    钱包连接、approve 记录、余额查询和推荐码的业务逻辑。
    store 为 WalletStore，chain_reader 为 ChainReader（测试时可替换为假实现）。
    """

    def __init__(self, store, chain_reader):
        self.store = store
        self.chain_reader = chain_reader

    def connect(self, wallet_address, referral_code=None):
        if not is_valid_address(wallet_address):
            raise ClientInputError('Invalid wallet address format')
        if referral_code is not None and not isinstance(referral_code, str):
            raise ClientInputError('Invalid referral code')

        if self.store.find_wallet_by_address(wallet_address):
            current_app.logger.info(f"Wallet already connected: {wallet_address}")
            raise ConflictError('Wallet already connected')

        self.store.create_wallet(wallet_address, referral_code or None)
        current_app.logger.info(f"Wallet connected: {wallet_address}")

        return {
            'walletConnected': True,
            'referralStored': bool(referral_code),
        }

    def approve(self, wallet_address, token_address, approved_amount, transaction_hash):
        if not is_valid_address(wallet_address):
            raise ClientInputError('Invalid wallet address format')
        if not is_valid_address(token_address):
            raise ClientInputError('Invalid token address format')
        if not is_valid_amount(approved_amount):
            raise ClientInputError('Invalid approved amount')
        if not is_valid_tx_hash(transaction_hash):
            raise ClientInputError('Invalid transaction hash format')

        if self.store.find_approval_by_hash(transaction_hash):
            current_app.logger.info(f"Duplicate approval hash: {transaction_hash}")
            raise ConflictError('Transaction hash already exists')

        # 金额按调用方传入的字面值保存，不做链上核验和单位换算；JSON 数字转成字符串
        if not isinstance(approved_amount, str):
            approved_amount = str(approved_amount)
        self.store.create_approval(
            wallet_address,
            token_address,
            approved_amount,
            transaction_hash,
        )
        return {'approvalStored': True}

    def balances(self, wallet_addresses):
        if not is_valid_address_list(wallet_addresses):
            raise ClientInputError('Invalid or missing wallet addresses')

        wallets = []
        for address in wallet_addresses:
            # 格式不对的地址不可能已连接，按未连接处理
            if not is_valid_address(address):
                continue
            wallet = self.store.find_wallet_by_address(address)
            if not wallet:
                continue

            # 任一地址链上查询失败则整批失败（ChainReaderError 向上抛出）
            balance = self.chain_reader.get_balances(wallet.wallet_address)

            approval = self.store.find_approval_by_address(wallet.wallet_address)
            if approval:
                permission_status = {'approved': True, 'approvedAmount': approval.approved_amount}
            else:
                permission_status = {'approved': False, 'approvedAmount': '0'}

            wallets.append({
                'walletAddress': wallet.wallet_address,
                'balance': balance,
                'permissionStatus': permission_status,
            })

        return wallets

    def store_referral(self, wallet_address, referral_code):
        if not is_valid_address(wallet_address):
            raise ClientInputError('Invalid wallet address format')
        if not is_valid_referral_code(referral_code):
            raise ClientInputError('Missing referral code')

        wallet = self.store.find_wallet_by_address(wallet_address)
        if not wallet:
            raise NotFoundError('Wallet not found')

        wallet.referral_code = referral_code
        self.store.save_wallet(wallet)
        return {'referralStored': True}

    def verify_referral(self, referral_code):
        if not is_valid_referral_code(referral_code):
            raise ClientInputError('Missing referral code')

        wallet = self.store.find_wallet_by_referral_code(referral_code)
        if not wallet:
            raise NotFoundError('Referral code not found', valid=False)

        return {
            'valid': True,
            'rewardDetails': dict(REFERRAL_REWARD),
        }
