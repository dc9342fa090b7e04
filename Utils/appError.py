class AppError(Exception):
    def __init__(self, message: str, status_code: int = 500):
        """
        Operational error raised by controllers and guards.

        Args:
            message (str): Message returned to the client.
            status_code (int): HTTP status code of the response.
        """
        super().__init__(message)

        self.message = message
        self.status_code = status_code
        self.status = "fail" if str(status_code).startswith("4") else "error"
        self.is_operational = True

    def to_dict(self) -> dict:
        return {"success": False, "status": self.status, "message": self.message}
