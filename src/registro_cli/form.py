import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

# ========== Field definitions ==========
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
TEL_RE = re.compile(r"^\+?[0-9 ()\-]{6,20}$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")

KIND_PATTERNS = {
    "email": EMAIL_RE,
    "tel": TEL_RE,
    "date": DATE_RE,
    "number": NUMBER_RE,
}


@dataclass
class FieldSpec:
    name: str
    label: str = ""
    required: bool = False
    kind: str = "text"
    pattern: Optional[str] = None
    max_length: Optional[int] = None
    default: str = ""

    def __post_init__(self):
        if not self.label:
            self.label = self.name.replace("_", " ").capitalize()
        if self.kind != "text" and self.kind not in KIND_PATTERNS:
            raise ValueError(f"Unknown field kind: {self.kind!r}")

    @classmethod
    def from_dict(cls, raw: dict) -> "FieldSpec":
        known = {k: raw[k] for k in ("name", "label", "required", "kind", "pattern", "max_length", "default") if k in raw}
        if "name" not in known:
            raise ValueError("Form field without a name")
        return cls(**known)

    def validation_message(self, value: str) -> Optional[str]:
        """Return why ``value`` does not satisfy this field, or None."""
        if not value:
            return "Campo requerido." if self.required else None
        if self.max_length is not None and len(value) > self.max_length:
            return f"Máximo {self.max_length} caracteres."
        kind_re = KIND_PATTERNS.get(self.kind)
        if kind_re and not kind_re.match(value):
            return f"Formato de {self.kind} no válido."
        if self.pattern and not re.fullmatch(self.pattern, value):
            return "No coincide con el formato solicitado."
        return None


DEFAULT_FIELDS: List[FieldSpec] = [
    FieldSpec("nombre", "Nombre", required=True),
    FieldSpec("apellido", "Apellido", required=True),
    FieldSpec("documento", "Documento", required=True),
    FieldSpec("email", "Correo electrónico", required=True, kind="email"),
    FieldSpec("telefono", "Teléfono", kind="tel"),
]


# ========== Form state ==========
@dataclass
class FileInput:
    """Single-file selection, like a browser file input without ``multiple``."""
    name: str = "archivo"
    path: Optional[Path] = None

    def select(self, path):
        self.path = Path(path).expanduser() if path else None

    def clear(self):
        self.path = None

    @property
    def selected(self) -> Optional[Path]:
        return self.path


@dataclass
class RegistrationForm:
    fields: List[FieldSpec] = field(default_factory=lambda: list(DEFAULT_FIELDS))
    values: Dict[str, str] = field(default_factory=dict)
    was_validated: bool = False

    def __post_init__(self):
        names = [f.name for f in self.fields]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate form field names")
        for f in self.fields:
            self.values.setdefault(f.name, f.default)

    def set(self, name: str, value: str):
        if name not in self.values:
            raise KeyError(f"Unknown form field: {name}")
        self.values[name] = value

    def get(self, name: str) -> str:
        return self.values[name]

    def invalid_fields(self) -> Dict[str, str]:
        errors = {}
        for f in self.fields:
            msg = f.validation_message(self.values.get(f.name, ""))
            if msg:
                errors[f.name] = msg
        return errors

    def check_validity(self) -> bool:
        return not self.invalid_fields()

    def to_payload(self) -> Dict[str, str]:
        # Every named field is sent, empty optional ones included.
        return {f.name: self.values.get(f.name, "") for f in self.fields}

    def reset(self):
        for f in self.fields:
            self.values[f.name] = f.default
        self.was_validated = False
