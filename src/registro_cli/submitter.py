import logging

from registro_cli.attachment import read_attachment
from registro_cli.client import HttpClient
from registro_cli.display import Notifier
from registro_cli.errors import (
    ResponseFormatError,
    SubmissionError,
    TransportError,
    ValidationError,
)
from registro_cli.form import FileInput, RegistrationForm
from registro_cli.utils import SubmitResult

logger = logging.getLogger(__name__)


class FormSubmitter:
    """Runs one submit cycle: validate, read the attachment, send, notify.

    Every failure ends the attempt and leaves the entered values in place.
    """

    def __init__(self, form: RegistrationForm, file_input: FileInput, http: HttpClient, notifier: Notifier):
        self.form = form
        self.file_input = file_input
        self.http = http
        self.notifier = notifier
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def submit(self) -> SubmitResult:
        if self._in_flight:
            logger.warning("Submit ignored, a previous one is still in flight")
            self.notifier.show_warning("Envío en curso", "Espera a que termine el envío anterior.")
            return SubmitResult(ok=False, kind="busy", message="submission in flight")

        self._in_flight = True
        try:
            return await self._submit()
        except SubmissionError as e:
            self._notify_failure(e)
            return SubmitResult(ok=False, kind=e.kind, message=e.user_message)
        finally:
            self._in_flight = False
            self.notifier.close()

    async def _submit(self) -> SubmitResult:
        self._validate()
        self.notifier.show_loading("Enviando Registro...", "Por favor, espere un momento.")

        payload = self.form.to_payload()
        selected = self.file_input.selected
        if selected is not None:
            attachment = await read_attachment(selected)
            payload.update(attachment.as_fields())

        result = await self.http.submit(payload)
        self.notifier.show_success("¡Registro Exitoso!", f"Tu ID de registro es: {result.id}")
        self.form.reset()
        self.file_input.clear()
        return result

    def _validate(self):
        if self.form.check_validity():
            return
        self.form.was_validated = True
        raise ValidationError(self.form.invalid_fields())

    def _notify_failure(self, e: SubmissionError):
        if isinstance(e, (TransportError, ResponseFormatError)):
            logger.error("Error: %r", e.cause or e)
        details = e.invalid_fields if isinstance(e, ValidationError) else None
        self.notifier.show_error(e.title, e.user_message, details=details)
