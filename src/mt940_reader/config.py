from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, field_validator

from .reader import DEFAULT_DIALECTS, Reader


class ReaderSettings(BaseModel):
    encoding: str = "utf-8"
    dialects: Optional[List[str]] = None  # None = todos los dialectos por defecto
    indent: int = 2

    @field_validator("dialects")
    @classmethod
    def _validate_dialects(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        known = {name for name, _ in DEFAULT_DIALECTS}
        unknown = [name for name in v if name not in known]
        if unknown:
            raise ValueError(f"unknown dialects: {', '.join(unknown)}")
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ReaderSettings":
        import yaml

        path = Path(path)
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def build_reader(self) -> Reader:
        reader = Reader()
        if self.dialects is not None:
            defaults = reader.get_default_dialects()
            # se respeta el orden indicado en la configuración
            reader.set_dialects({name: defaults[name] for name in self.dialects})
        return reader
