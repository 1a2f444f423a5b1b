"""Shared test helpers"""
import json
from unittest.mock import Mock


def mock_http_response(json_data=None, status_code=200, invalid_json=False):
    """Return a mock requests.Response whose .json() returns json_data."""
    resp = Mock()
    resp.ok = 200 <= status_code < 400
    resp.status_code = status_code
    if invalid_json:
        resp.json.side_effect = ValueError('No JSON object could be decoded')
        resp.text = '<html>Bad Gateway</html>'
    else:
        resp.json.return_value = json_data
        resp.text = json.dumps(json_data)
    resp.headers = {'Content-Type': 'application/json'}
    return resp
