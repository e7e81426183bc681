"""
Пользовательская иерархия исключений приложения.
"""


class AppException(Exception):
    def __init__(self, status_code: int, detail: str, error_code: str | None = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code


class NotFoundException(AppException):
    def __init__(self, resource: str, identifier):
        super().__init__(404, f"{resource} {identifier} not found", "NOT_FOUND")


class DuplicateError(AppException):
    def __init__(self, detail: str):
        super().__init__(409, detail, "DUPLICATE")


class DispatchError(AppException):
    """Ошибка цикла рассылки, ни одна строка не помечена отправленной."""

    def __init__(self, detail: str, error_code: str = "DISPATCH_FAILED"):
        super().__init__(500, detail, error_code)


class PushGatewayError(DispatchError):
    """Push-шлюз ответил не-2xx статусом."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__("Expo push failed", "PUSH_GATEWAY_ERROR")
        self.gateway_status = status_code
        self.gateway_body = body


class MarkSentError(DispatchError):
    """
    Шлюз принял сообщения, но пометить строки не удалось.
    Строки остаются sent=false и уйдут повторно в следующем цикле.
    """

    def __init__(self, ids: list[str], reason: str):
        super().__init__(f"Failed to mark notifications as sent: {reason}", "MARK_SENT_FAILED")
        self.ids = ids
