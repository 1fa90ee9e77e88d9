
import requests
import json

url = "http://localhost:7071/api/compare"
payload = {
    "value": 70,
    "unit": "micrometer",
    "dimension": "length",
    "cutoff": {"max_results": 5}
}

print(f"Sending request to {url}...")
print(f"Payload: {json.dumps(payload, indent=2)}")

try:
    response = requests.post(url, json=payload, timeout=30)
    print(f"Status Code: {response.status_code}")
    print("Response Body:")
    print(response.text)
except requests.RequestException as e:
    print(f"Error: {e}")
