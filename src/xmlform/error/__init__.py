from xmlform import config, logger


DEBUG_APP_EXCEPTION = config.DEBUG_APP_EXCEPTION


class XMLFormException(Exception):
    status_code = 500
    label = "Internal Error"
    errcode = "X00.000"

    def __init__(self, errcode, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.errcode = errcode

        DEBUG_APP_EXCEPTION and logger.exception(message)

    def __str__(self):
        if self.details is None:
            return f"{self.errcode} [{self.status_code}] >> {self.message}"

        return f"{self.errcode} [{self.status_code}] >> {self.message} >> {self.details}"

    @property
    def content(self):
        if not self.details:
            return {"errcode": self.errcode, "message": self.message}

        return {"errcode": self.errcode, "message": self.message, "details": self.details}


class NotFoundError(XMLFormException):
    label = "Not Found"
    status_code = 404
    errcode = "X00.404"


class BadRequestError(XMLFormException):
    label = "Bad Request"
    status_code = 400
    errcode = "X00.400"


class UnprocessableError(XMLFormException):
    label = "Unprocessable Entity"
    status_code = 422
    errcode = "X00.422"


class InternalServerError(XMLFormException):
    label = "Internal Server Error"
    status_code = 500
    errcode = "X00.500"
