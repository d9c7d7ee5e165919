from __future__ import annotations

from dataclasses import dataclass

from mdtabs.domain.interfaces import IConfigService


@dataclass(frozen=True)
class RenderOptions:
    max_nesting: int = 64
    highlight_code: bool = True

    @classmethod
    def from_config(cls, cfg: IConfigService) -> RenderOptions:
        nesting = cfg.get_int("render", "max_nesting", cls.max_nesting)
        return cls(
            max_nesting=nesting if nesting and nesting > 0 else cls.max_nesting,
            highlight_code=bool(cfg.get_bool("render", "highlight_code", cls.highlight_code)),
        )


@dataclass(frozen=True)
class PreviewOptions:
    debounce_ms: int = 150
    asynchronous: bool = False
    prefer_webengine: bool = True

    @classmethod
    def from_config(cls, cfg: IConfigService) -> PreviewOptions:
        debounce = cfg.get_int("preview", "debounce_ms", cls.debounce_ms)
        return cls(
            debounce_ms=max(0, debounce if debounce is not None else cls.debounce_ms),
            asynchronous=bool(cfg.get_bool("preview", "asynchronous", cls.asynchronous)),
            prefer_webengine=bool(
                cfg.get_bool("preview", "prefer_webengine", cls.prefer_webengine)
            ),
        )
