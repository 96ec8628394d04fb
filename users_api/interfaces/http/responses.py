# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Response, jsonify
from pydantic import BaseModel


def success(
    title: str,
    message: str,
    data: BaseModel | None = None,
    *,
    status: HTTPStatus = HTTPStatus.OK,
) -> tuple[Response, HTTPStatus]:
    payload: dict[str, Any] = {"type": "Success", "title": title, "message": message}
    if data is not None:
        payload["data"] = data.model_dump(mode="json")
    return jsonify(payload), status


__all__ = ["success"]
