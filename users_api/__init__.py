# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""User-account HTTP API: registration, login, logout, lookup and profile update."""

__version__ = "0.1.0"
