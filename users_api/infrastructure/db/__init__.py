# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import Base, Database, build_engine
from . import models  # noqa: F401,E402  (registers tables on Base.metadata)

__all__ = ["Base", "Database", "build_engine"]
