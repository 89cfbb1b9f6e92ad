# clients/python/sizing_api_client.py
import requests
from typing import Dict, Any, Optional, List, Tuple


class SanitarySizingClient:
    """
    Client for the Sanitary Pipe Sizing API.

    Attributes:
        base_url: Base URL of the API
        api_key: API key for authentication
        headers: Headers to include in all requests
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the API (e.g., "http://localhost:8000")
            api_key: API key for authentication
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.headers = {"X-API-Key": api_key}
        self.timeout = timeout

    def check_connection(self) -> Tuple[bool, str]:
        """
        Check if the API is accessible.

        Returns:
            Tuple of (success, message)
        """
        try:
            response = requests.get(
                f"{self.base_url}/health",
                headers=self.headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            return False, f"Connection error: {str(e)}"

        if response.status_code == 200:
            return True, "Connection successful"
        return False, f"API returned status code {response.status_code}"

    def size_segments(
        self,
        segments: List[Dict[str, Any]],
        config: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Submit segments for sizing.

        Args:
            segments: Segment dictionaries (id, endpoint_a, endpoint_b, load_units, ...)
            config: Optional sizing config overrides

        Returns:
            Sizing response with count_sized, segments and records

        Raises:
            requests.HTTPError: If the API request fails
        """
        payload: Dict[str, Any] = {"segments": segments}
        if config:
            payload["config"] = config

        response = requests.post(
            f"{self.base_url}/sizing/size",
            json=payload,
            headers=self.headers,
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def get_tables(self) -> Dict[str, Any]:
        """
        Get the capacity tables in effect on the server.

        Raises:
            requests.HTTPError: If the API request fails
        """
        response = requests.get(
            f"{self.base_url}/sizing/tables",
            headers=self.headers,
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()


# Example usage
if __name__ == "__main__":
    client = SanitarySizingClient(
        base_url="http://localhost:8000",
        api_key="dev_key"
    )

    connected, message = client.check_connection()
    print(f"Connection check: {message}")

    if connected:
        result = client.size_segments([
            {"id": "s1", "endpoint_a": [0, 0, 10], "endpoint_b": [0, 0, 9], "load_units": 40},
            {"id": "s2", "endpoint_a": [0, 0, 9], "endpoint_b": [0, 0, 8], "load_units": 100},
            {"id": "s3", "endpoint_a": [0, 0, 5], "endpoint_b": [8, 0, 5],
             "load_units": 5, "slope": 0.02},
        ])
        print(result["summary"])
