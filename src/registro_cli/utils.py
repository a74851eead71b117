import tomllib
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field

from registro_cli.form import DEFAULT_FIELDS, FieldSpec

DEFAULT_CONFIG_PATH = Path("~/.registro.cli.toml")


# ========== Config & Models ==========
@dataclass
class Config:
    url: str
    timeout: int = 30
    verify_tls: bool = True
    debug: bool = False
    fields: List[FieldSpec] = field(default_factory=lambda: list(DEFAULT_FIELDS))

    @classmethod
    def init_form_args(cls, args) -> "Config":
        """Merge CLI arguments over the TOML config file.

        ``args`` is any object with ``url``, ``timeout``, ``insecure``,
        ``debug`` and ``config`` attributes; unset options are None/False.
        """
        path = Path(args.config or DEFAULT_CONFIG_PATH).expanduser()
        raw = load_config_file(path)

        url = args.url or raw.get("url")
        if not url:
            raise ValueError(f"No endpoint url given. Pass --url or set `url` in {path}")

        fields = [FieldSpec.from_dict(f) for f in raw.get("fields", [])] or list(DEFAULT_FIELDS)
        return cls(
            url=url,
            timeout=args.timeout if args.timeout is not None else int(raw.get("timeout", 30)),
            verify_tls=not (args.insecure or raw.get("insecure", False)),
            debug=bool(args.debug or raw.get("debug", False)),
            fields=fields,
        )


def load_config_file(path: Path) -> dict:
    if not path.is_file():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


@dataclass
class SubmitResult:
    ok: bool
    id: Optional[str] = None
    message: Optional[str] = None
    kind: Optional[str] = None
