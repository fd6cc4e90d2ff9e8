# generate_key.py
#
# Prints the value for FIREBASE_SERVICE_ACCOUNT_KEY_BASE64:
#   python generate_key.py [path/to/service-account.json]

import base64
import json
import sys

DEFAULT_SERVICE_ACCOUNT_FILE = "firebase-service-account.json"


def encode_service_account(path: str) -> str:
    with open(path, 'r') as f:
        # Round-trip through json so the encoded value is a single line
        service_account_data = json.load(f)
    service_account_json_string = json.dumps(service_account_data)
    return base64.b64encode(service_account_json_string.encode('utf-8')).decode('utf-8')


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else DEFAULT_SERVICE_ACCOUNT_FILE
    try:
        encoded = encode_service_account(path)
    except FileNotFoundError:
        print(f"Error: {path} not found.")
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Could not decode JSON from {path}. Check file integrity. Error: {e}")
        return 1

    print("--- COPY THIS ENTIRE STRING INTO FIREBASE_SERVICE_ACCOUNT_KEY_BASE64 ---")
    print(encoded)
    print("--- END COPY ---")
    return 0


if __name__ == '__main__':
    sys.exit(main())
