from __future__ import annotations

from dataclasses import dataclass

from pasta_core.ports import PastaBowl

from pastad.config import Settings


@dataclass
class AppContext:
    settings: Settings
    bowl: PastaBowl
