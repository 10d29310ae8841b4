"""
SuiSense API Python client example.

Uses the requests library.

Usage:
    from docs.python_sdk_example import SuiSenseClient
    client = SuiSenseClient("http://localhost:8000")
    result = client.explain_tx("6Tm1...digest", network="testnet")
"""

from __future__ import annotations

from typing import Any

import requests


class SuiSenseClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: requests.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class SuiSenseClient:
    """Client for the SuiSense explanation API."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        resp = self._session.request(method, url, json=json, timeout=self.timeout)
        if not resp.ok:
            is_json = resp.headers.get("content-type", "").startswith("application/json")
            detail = resp.json().get("error", resp.text) if is_json else resp.text
            raise SuiSenseClientError(
                f"API error: {detail}",
                status_code=resp.status_code,
                response=resp,
            )
        return resp

    def health(self) -> dict[str, str]:
        """Liveness probe."""
        return self._request("GET", "/health").json()

    def explain_tx(
        self,
        tx_digest: str,
        network: str | None = None,
        rpc_url: str | None = None,
    ) -> dict[str, Any]:
        """Explain a transaction: intent, assets, risk, explanation and anchor ids."""
        body: dict[str, Any] = {"tx_digest": tx_digest}
        if network is not None:
            body["network"] = network
        if rpc_url is not None:
            body["rpc_url"] = rpc_url
        return self._request("POST", "/explain/tx", json=body).json()

    def explain_error(self, raw_error: str, tool: str = "sui-cli") -> dict[str, Any]:
        """Classify and explain raw Move error output."""
        return self._request("POST", "/explain/error", json={"tool": tool, "raw_error": raw_error}).json()


# -----------------------------------------------------------------------------
# Example usage
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    client = SuiSenseClient("http://localhost:8000")

    print("Health:", client.health())

    err = client.explain_error(
        "Error executing transaction: MoveAbort in 0x2::coin::split, abort code: 0"
    )
    print("Category:", err["category"], "confidence:", err["confidence"])
    for step in err["fix_steps"]:
        print("  -", step)

    try:
        tx = client.explain_tx("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", network="testnet")
        print("Intent:", tx["intent"], "risk:", tx["risk"])
        print("Content hash:", tx["content_hash"])
    except SuiSenseClientError as e:
        if e.status_code == 502:
            print("Fullnode lookup failed:", e)
        else:
            raise
