# wallet_store.py
from sqlalchemy.exc import IntegrityError
from models import Wallet, Approval
from utils.errors import ConflictError


class WalletStore:
    """
    wallets / approvals 两张表的数据访问层。
    多条记录命中时取 created_at 最新的一条（相同再按 id 倒序）。
    """

    def __init__(self, session):
        self.session = session

    # ---------- wallets ----------

    def find_wallet_by_address(self, address):
        return self.session.query(Wallet).filter_by(wallet_address=address.lower()).first()

    def find_wallet_by_referral_code(self, code):
        return (
            self.session.query(Wallet)
            .filter_by(referral_code=code)
            .order_by(Wallet.created_at.desc(), Wallet.id.desc())
            .first()
        )

    def create_wallet(self, wallet_address, referral_code=None):
        wallet = Wallet(wallet_address=wallet_address.lower(), referral_code=referral_code)
        self.session.add(wallet)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError('Wallet already connected')
        return wallet

    def save_wallet(self, wallet):
        self.session.add(wallet)
        self.session.commit()
        return wallet

    # ---------- approvals ----------

    def find_approval_by_hash(self, transaction_hash):
        return self.session.query(Approval).filter_by(transaction_hash=transaction_hash.lower()).first()

    def find_approval_by_address(self, address):
        return (
            self.session.query(Approval)
            .filter_by(wallet_address=address.lower())
            .order_by(Approval.created_at.desc(), Approval.id.desc())
            .first()
        )

    def create_approval(self, wallet_address, token_address, approved_amount, transaction_hash):
        approval = Approval(
            wallet_address=wallet_address.lower(),
            token_address=token_address.lower(),
            approved_amount=approved_amount,
            transaction_hash=transaction_hash.lower(),
        )
        self.session.add(approval)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError('Transaction hash already exists')
        return approval
