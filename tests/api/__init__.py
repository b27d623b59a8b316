"""API tests package.

Tests the request/response cycle using TestClient:
- Request validation
- Response envelopes and status codes
- Session cookies and headers

Note:
    test_auth_api.py stubs the handlers to test the presentation layer in
    isolation; test_auth_session_e2e.py runs the full stack.
"""
