#!/usr/bin/env python
"""
Run script for the SellerOps control plane.
Use: python run_sellerops.py
Or: streamlit run sellerops/ui/app.py
"""
import sys
import subprocess


def main():
    """Run the Streamlit app."""
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        "sellerops/ui/app.py",
        "--server.port=8502",
        "--browser.gatherUsageStats=false",
    ])


if __name__ == "__main__":
    main()
