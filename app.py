from flask import Flask, jsonify
from flask_cors import CORS
from extensions import db, migrate
from dotenv import load_dotenv
import os

# 提前导入模型注册函数（明确显示依赖关系）
from models import register_models

from blueprints.wallet import wallet_bp
from utils.chain_reader import ChainReader

load_dotenv()

# 默认查询主网 USDT（6 位小数）
DEFAULT_TOKEN_ADDRESS = '0xdAC17F958D2ee523a2206206994597C13D831ec7'
DEFAULT_TOKEN_DECIMALS = 6


def create_app(test_config=None, chain_reader=None):
    app = Flask(__name__)

    CORS(app)

    # ===== 配置 =====
    app.config.update(
        SQLALCHEMY_DATABASE_URI=os.getenv('DB_URI', 'sqlite:///wallet.db'),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        WEB3_PROVIDER=os.getenv('WEB3_PROVIDER') or os.getenv('INFURA_URL'),
        TOKEN_ADDRESS=os.getenv('TOKEN_ADDRESS', DEFAULT_TOKEN_ADDRESS),
        TOKEN_DECIMALS=int(os.getenv('TOKEN_DECIMALS', DEFAULT_TOKEN_DECIMALS)),
        LOG_LEVEL=os.getenv('LOG_LEVEL', 'INFO'),
    )
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config['LOG_LEVEL'])

    # ===== 初始化扩展 =====
    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        register_models()  # 确保在应用上下文中注册

    # ===== 链上只读客户端（进程内唯一，测试时可注入） =====
    if chain_reader is None:
        chain_reader = ChainReader.from_provider(
            app.config['WEB3_PROVIDER'],
            app.config['TOKEN_ADDRESS'],
            app.config['TOKEN_DECIMALS'],
        )
    app.extensions['chain_reader'] = chain_reader
    app.logger.info(
        f"Chain endpoint: {app.config['WEB3_PROVIDER']}, "
        f"token: {app.config['TOKEN_ADDRESS']} ({app.config['TOKEN_DECIMALS']} decimals)"
    )

    # ===== 注册蓝图 =====
    app.register_blueprint(wallet_bp)

    # 健康检查
    @app.route('/')
    def health_check():
        return jsonify({'status': 'healthy'})

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)))
