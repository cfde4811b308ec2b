"""
E-Sumbong Crime Map - Streamlit GUI Application

This module provides the Streamlit-based web interface for browsing
community incident reports on an interactive map.

Run with:
    streamlit run app.py
"""

import logging

import streamlit as st

from sumbong.maps.map_page import render_map_page

# Configure Streamlit page
st.set_page_config(
    page_title="E-Sumbong Crime Map",
    page_icon="🗺️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def main():
    """Main Streamlit application entry point"""

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    render_map_page()

    st.markdown("---")
    st.caption("Reports are shown as submitted by residents; verified reports have been confirmed by barangay officials.")


if __name__ == "__main__":
    main()
