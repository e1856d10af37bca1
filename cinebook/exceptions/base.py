import traceback


class CineBookError(Exception):
    status_code = 500
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, status_code: int = None, code: str = None, stack_trace: bool = False):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.stack_trace = traceback.format_exc() if stack_trace else None
        super().__init__(self.message)

    def __str__(self):
        return self.message
