# SPDX-License-Identifier: MIT

from .page import render_page
from .server import ChangeWatermark, TweakerServer, create_app, run
from .settings import TweakerSettings

__all__ = [
    "ChangeWatermark",
    "TweakerServer",
    "TweakerSettings",
    "create_app",
    "render_page",
    "run",
]
