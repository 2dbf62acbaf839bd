"""Streamlit UI for the SellerOps control plane."""
