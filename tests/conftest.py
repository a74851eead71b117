import io

import pytest
from rich.console import Console

from registro_cli.client import HttpClient
from registro_cli.display import Notifier
from registro_cli.form import FileInput, RegistrationForm
from registro_cli.submitter import FormSubmitter
from registro_cli.utils import Config


class FakeHttpClient(HttpClient):
    """Records outbound payloads and answers with a canned body or error."""

    def __init__(self, cfg, body=None, error=None):
        super().__init__(cfg)
        self.body = body if body is not None else {"success": True, "id": "R1"}
        self.error = error
        self.sent = []

    async def post_form(self, payload):
        self.sent.append(dict(payload))
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def cfg():
    return Config(url="https://example.test/exec")


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def notifier(output):
    return Notifier(out=Console(file=output, width=120))


@pytest.fixture
def form():
    return RegistrationForm()


@pytest.fixture
def filled_form(form):
    form.set("nombre", "Ana")
    form.set("apellido", "García")
    form.set("documento", "12345678")
    form.set("email", "ana@example.com")
    return form


@pytest.fixture
def make_submitter(cfg, notifier, filled_form):
    def _make(body=None, error=None, form=None):
        http = FakeHttpClient(cfg, body=body, error=error)
        return FormSubmitter(form or filled_form, FileInput(), http, notifier)
    return _make
