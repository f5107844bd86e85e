from datetime import datetime, timezone
from extensions import db


class Wallet(db.Model):
    __tablename__ = 'wallets'

    id = db.Column(db.Integer, primary_key=True)
    wallet_address = db.Column(db.String(42), unique=True, nullable=False)  # 小写存储
    referral_code = db.Column(db.String(128), nullable=True, index=True)    # 可重复
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Wallet {self.wallet_address}>"

    def to_dict(self):
        return {
            "walletAddress": self.wallet_address,
            "referralCode": self.referral_code,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
