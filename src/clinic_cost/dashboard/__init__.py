"""Streamlit dashboard and plotly chart builder."""
