import sys
from pathlib import Path

# Set up paths: the repo root for `refranero`, this directory for `helpers`.
tests_dir = Path(__file__).parent
sys.path.append(str(tests_dir.parent))
sys.path.insert(0, str(tests_dir))
