import os
import tempfile
from pathlib import Path

# scan_options.options loads its config on import, keep it away from ~/.config
os.environ["CONFIG_FILE"] = str(Path(tempfile.mkdtemp()) / "config.yml")
