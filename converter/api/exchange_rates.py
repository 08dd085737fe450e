import requests

BASE = "https://open.er-api.com/v6"
LATEST_URL = f"{BASE}/latest/USD"

class ExchangeRateClient:
    def __init__(self, url: str = LATEST_URL, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def latest(self):
        # raw JSON; payload checks live in the rate store
        r = requests.get(self.url, timeout=self.timeout)
        r.raise_for_status()
        return r.json()
