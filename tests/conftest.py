import sys
from pathlib import Path

# Ensure the project root is on the import path so ``inflight_counter`` can be imported
root_path = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(root_path))
