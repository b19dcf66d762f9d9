# uvcgadget/core/context.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import yaml

from uvcgadget.model.frame import FrameSpec
from uvcgadget.model.gadget import ConfigDescriptor, FunctionSettings, GadgetIdentity, OsDescriptor
from uvcgadget.model.loader import ProfileLoader
from uvcgadget.runtime.layout import GadgetLayout

from uvcgadget.core.errors import ConfigError


@dataclass(frozen=True)
class Context:
    """
    Read-only gadget profile: identity, configuration, function settings and the
    static frame registry. Runtime frames live only in the tree.
    """
    identity: GadgetIdentity
    config: ConfigDescriptor
    os_desc: OsDescriptor
    function: FunctionSettings
    registry: Tuple[FrameSpec, ...]
    metadata_dir: Path

    @property
    def layout(self) -> GadgetLayout:
        return GadgetLayout.for_profile(self.identity, self.config, self.function)

    @classmethod
    def load(cls, metadata_dir: str | Path) -> "Context":
        """Load gadget.yml + resolutions.yml from ``metadata_dir``."""
        metadata_dir = Path(metadata_dir)

        pl = ProfileLoader(metadata_dir)
        try:
            pl.load_all()
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(
                "Failed to load gadget profile.",
                hint=str(e),
                details={"metadata_dir": str(metadata_dir)},
            ) from None
        except Exception as e:
            raise ConfigError(
                "Unexpected error while loading gadget profile.",
                hint=str(e),
                details={"metadata_dir": str(metadata_dir)},
            ) from None

        assert pl.identity is not None
        return cls(
            identity=pl.identity,
            config=pl.config,
            os_desc=pl.os_desc,
            function=pl.function,
            registry=tuple(pl.frames),
            metadata_dir=metadata_dir,
        )
