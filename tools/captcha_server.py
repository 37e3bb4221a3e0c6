import sys
import os
import importlib


# Fail loudly and helpfully if required Python packages are missing.
def _require_modules(mods):
    missing = []
    for m in mods:
        try:
            importlib.import_module(m)
        except ImportError:
            missing.append(m)
    if missing:
        print("\nERROR: Missing required Python package(s): {}".format(', '.join(missing)))
        print("Install them with:")
        print("  python -m pip install -e .")
        sys.exit(1)


_require_modules(['flask', 'soundfile', 'numpy'])

# Allow running from a checkout without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from MCE.API.server import main


if __name__ == '__main__':
    # Listens on localhost:3000 unless HOST / PORT or --host / --port say otherwise
    main()
