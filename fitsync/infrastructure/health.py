# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from sqlalchemy import text

from fitsync.infrastructure.db import ENGINE


def check_database() -> float:
    """Round-trip a trivial query; returns latency in milliseconds."""
    started = time.perf_counter()
    with ENGINE.connect() as connection:
        connection.execute(text("SELECT 1"))
    return (time.perf_counter() - started) * 1000.0


__all__ = ["check_database"]
