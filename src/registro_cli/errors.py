"""Failures of a single submit attempt.

Each one carries the notification title and text shown to the user. None is
retried; the user corrects the form and submits again.
"""

CONNECTION_MESSAGE = "No se pudo enviar el registro. Verifica tu conexión e inténtalo de nuevo."


class SubmissionError(Exception):
    kind = "error"
    title = "Error"
    user_message = "Ocurrió un error inesperado."

    def __init__(self, user_message=None, *, cause=None):
        self.user_message = user_message or self.user_message
        self.cause = cause
        super().__init__(self.user_message)


class ValidationError(SubmissionError):
    kind = "validation"
    title = "Formulario Incompleto"
    user_message = "Por favor, completa todos los campos requeridos."

    def __init__(self, invalid_fields=None):
        super().__init__()
        self.invalid_fields = dict(invalid_fields or {})


class FileReadError(SubmissionError):
    kind = "file"
    title = "Error"
    user_message = "No se pudo procesar el archivo adjunto."


class TransportError(SubmissionError):
    kind = "transport"
    title = "Error de Conexión"
    user_message = CONNECTION_MESSAGE


class ResponseFormatError(SubmissionError):
    # Shown to the user exactly like a transport failure.
    kind = "format"
    title = "Error de Conexión"
    user_message = CONNECTION_MESSAGE


class BusinessError(SubmissionError):
    kind = "business"
    title = "Error al Registrar"
