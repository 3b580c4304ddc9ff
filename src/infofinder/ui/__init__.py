"""Streamlit dashboard for infofinder lookups."""
