#!/usr/bin/env python
"""Start the Event Schema Service from a source checkout.

Uses config.sample.yaml unless SCHEMA_SVC_CONFIG names another config file.
"""

import os
import sys
from pathlib import Path

repo_root = Path(__file__).parent.resolve()

# catalog.schema_file in config.sample.yaml is relative to the repo root
os.chdir(repo_root)
sys.path.insert(0, str(repo_root / "src"))

if __name__ == "__main__":
    os.environ.setdefault("SCHEMA_SVC_CONFIG", "config.sample.yaml")

    from schema_svc.main import run
    run()
