"""Upload a G-code file to a Repetier-Server printer example."""

import sys
from pathlib import Path

from printhost.client import PrintHostUpload, RepetierServer

host = RepetierServer(host="192.168.1.20:3344", api_key="YOUR_API_KEY", printer_name="Prusa_MK3")

ok, msg = host.test()
if not ok:
    print(host.get_test_failed_msg(msg))
    sys.exit(1)
print(host.get_test_ok_msg())

source = Path(sys.argv[1])
upload = PrintHostUpload(source_path=source, upload_path=source.name, start_print=False)


def show_progress(progress, cancel):
    print(f"\r{progress.percent:5.1f}%", end="", flush=True)


if host.upload(upload, show_progress, lambda error: print(f"\nUpload failed: {error}")):
    print(f"\nUploaded {source.name}")
