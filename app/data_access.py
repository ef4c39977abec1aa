from __future__ import annotations

import asyncio
import os
from collections.abc import Coroutine
from typing import Any, TypeVar

import streamlit as st

from lapview.api import RaceApiClient
from lapview.config import Settings
from lapview.controller import AnalysisController, AnalysisKind
from lapview.models import RaceSession

T = TypeVar("T")


def resolve_settings() -> Settings:
    base_url = os.getenv("RACE_API_BASE_URL", "")
    if not base_url:
        try:
            base_url = st.secrets["RACE_API_BASE_URL"]
        except (KeyError, FileNotFoundError):
            base_url = Settings().api_base_url
    return Settings(api_base_url=base_url.rstrip("/"))


@st.cache_resource
def get_client() -> RaceApiClient:
    return RaceApiClient(resolve_settings())


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Drive one coroutine to completion inside a Streamlit rerun."""
    return asyncio.run(coro)


def get_controller(view_key: str, kind: AnalysisKind) -> AnalysisController:
    """Return the controller owned by one view, creating it on first render.

    Controllers live in ``st.session_state`` so each browser session and each
    view keeps its own selection and request state.
    """
    state_key = f"controller_{view_key}"
    if state_key not in st.session_state:
        controller = AnalysisController(get_client(), kind)
        run(controller.refresh_catalog())
        st.session_state[state_key] = controller
    return st.session_state[state_key]


def list_sessions() -> list[RaceSession]:
    return run(get_client().list_sessions())


def download_race_raw(race_id: str) -> bytes:
    return run(get_client().download_race_raw(race_id))


def delete_race(race_id: str) -> None:
    run(get_client().delete_race(race_id))


def upload_race(payload_b64: str) -> dict[str, Any]:
    return run(get_client().upload_race(payload_b64))
