from datetime import datetime, timezone
from extensions import db


class Approval(db.Model):
    """
    ERC-20 approve 事件记录，按 transaction_hash 幂等写入。
    wallet_address 与 wallets 表没有外键约束。
    """
    __tablename__ = 'approvals'

    id = db.Column(db.Integer, primary_key=True)
    wallet_address = db.Column(db.String(42), nullable=False, index=True)
    token_address = db.Column(db.String(42), nullable=False)
    approved_amount = db.Column(db.String(100), nullable=False)  # 调用方传入的原始字符串
    transaction_hash = db.Column(db.String(66), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Approval {self.transaction_hash}>"

    def to_dict(self):
        return {
            "walletAddress": self.wallet_address,
            "tokenAddress": self.token_address,
            "approvedAmount": self.approved_amount,
            "transactionHash": self.transaction_hash,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
