# errors.py
class WalletServiceError(Exception):
    """钱包服务异常基类，由蓝图统一转换为 JSON 响应"""
    status_code = 500

    def __init__(self, message, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def payload(self):
        data = dict(self.extra)
        data['error'] = self.message
        return data


class ClientInputError(WalletServiceError):
    status_code = 400


class ConflictError(WalletServiceError):
    status_code = 400


class NotFoundError(WalletServiceError):
    status_code = 404


class InternalError(WalletServiceError):
    status_code = 500

    def payload(self):
        # 内部错误不向调用方暴露细节
        return {'error': 'Internal server error'}


class ChainReaderError(InternalError):
    pass
