"""Top navigation bar component."""

from __future__ import annotations

from datetime import datetime
from html import escape

import streamlit as st


def render_navbar(user_name: str, page_title: str) -> None:
    """Render dashboard header with the current page, user and timestamp."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    st.markdown(
        f"""
        <div class="navbar">
            <div class="navbar-title">Parish Records &middot; {escape(page_title)}</div>
            <div class="navbar-meta">User: {escape(user_name)} | {timestamp}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )
