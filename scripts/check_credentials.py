"""
Check that SERVICE_ACCOUNT_PATH points at a usable service account key.

Usage: python scripts/check_credentials.py [path]
"""

import sys

from ally.config.firebase import validate_credentials_file
from ally.core.settings import get_settings


def main() -> int:
    path = sys.argv[1] if len(sys.argv) > 1 else get_settings().SERVICE_ACCOUNT_PATH
    if not path:
        print("FAILURE: SERVICE_ACCOUNT_PATH is not set.")
        return 1

    try:
        cred_data = validate_credentials_file(path)
    except (FileNotFoundError, ValueError) as e:
        print("FAILURE: could not load the credentials file at the specified path.")
        print(f"Error Details: {e}")
        return 1

    print("SUCCESS: File loaded successfully.")
    print(f"Project ID found: {cred_data['project_id']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
