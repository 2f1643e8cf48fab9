#!/usr/bin/env python3
"""Download a payslip from a running API and save it as a PDF.

The record is fetched over HTTP and the document is rendered locally, the
same way the web client exports an already-fetched payslip.
"""
import argparse
import os
import sys

import requests

from .config import API_BASE_URL
from .render.document import payslip_filename, render_payslip_pdf
from .schemas.payslip import PayslipRead


def fetch_payslip(base_url: str, payslip_id: str, timeout: float = 10) -> PayslipRead:
    resp = requests.get(f"{base_url.rstrip('/')}/payslips/{payslip_id}", timeout=timeout)
    resp.raise_for_status()
    return PayslipRead.model_validate(resp.json())


def export_payslip(base_url: str, payslip_id: str, output_dir: str = ".") -> str:
    payslip = fetch_payslip(base_url, payslip_id)
    pdf = render_payslip_pdf(payslip)
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, payslip_filename(payslip))
    with open(path, "wb") as f:
        f.write(pdf)
    return path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Export a payslip as a PDF file")
    parser.add_argument("payslip_id", help="Identifier of the payslip to export")
    parser.add_argument("--url", default=API_BASE_URL, help="Base URL of the payslip API")
    parser.add_argument("--out", default=".", help="Directory to write the PDF into")
    args = parser.parse_args(argv)

    try:
        path = export_payslip(args.url, args.payslip_id, args.out)
    except requests.HTTPError as e:
        if e.response is not None and e.response.status_code == 404:
            print(f"Payslip {args.payslip_id} not found at {args.url}", file=sys.stderr)
            return 1
        raise
    print(f"Payslip {args.payslip_id} saved to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
