# 1. 显式导入所有模型类（供__all__和直接引用使用）
from extensions import db

from .wallet_models import Wallet
from .approval_models import Approval

__all__ = [
    'Wallet',
    'Approval',
]


# 2. 显式注册函数（确保Flask-Migrate能发现模型）
def register_models():
    """强制导入所有模型模块（触发SQLAlchemy注册）"""
    from . import wallet_models
    from . import approval_models
