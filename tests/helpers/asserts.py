from typing import Optional, Dict, Any
from fastapi.testclient import TestClient

from hr_training.schemas.response import ServiceResult

def api_call(client: TestClient, method: str, path: str, json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None, expected_min: int = 200, expected_max: int = 300):
    response = client.request(method, path, json=json, params=params)
    ok = expected_min <= response.status_code < expected_max
    try:
        body = response.json()
    except ValueError:
        body = response.text
    assert ok, f"{method} {path} => {response.status_code}, body={body}, json={json}"
    return response

def assert_ok(result: ServiceResult):
    assert result.success, f"expected success, got {result.code}: {result.error}"
    return result.data

def assert_failed(result: ServiceResult, code: str, message: Optional[str] = None):
    assert not result.success, f"expected failure {code}, got data={result.data}"
    assert result.code == code
    assert result.data is None
    if message is not None:
        assert result.error == message
    return result.error
