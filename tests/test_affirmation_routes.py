"""Tests for the affirmation HTTP endpoint.

Each test builds a fresh app through the factory, so rate limit counters and
opener histories never leak between tests. The LLM is a FakeLLMClient unless
a test checks provider configuration.
"""

import pytest

from conftest import FakeLLMClient, ScriptedRandom
from mirror_api.core.errors import LLMAppError
from mirror_api.services.opener_bank import OPENER_BANK
from mirror_api.services.prompt_rules import INTENT_TEXT

URL = "/api/affirmation"


def test_generates_affirmation_with_defaults(make_client, fake_llm) -> None:
    client = make_client()

    response = client.post(URL, json={})

    assert response.status_code == 200
    body = response.json()
    assert body["text"] == "You stand on steady ground."
    assert body["meta"]["source"] == "remote"
    assert body["meta"]["remaining"] == 29
    assert body["meta"]["createdAtISO"].endswith("Z")
    assert "Write exactly 3 short sentence(s)." in fake_llm.prompts[0]


def test_empty_body_uses_defaults(make_client, fake_llm) -> None:
    client = make_client()

    response = client.post(URL)

    assert response.status_code == 200
    assert "You are MIRROR, MIRROR" in fake_llm.prompts[0]


def test_request_options_reach_the_prompt(make_client, fake_llm) -> None:
    client = make_client(rng=ScriptedRandom(indices=[0], floats=[0.99]))

    response = client.post(
        URL,
        json={
            "name": "Lucía",
            "sentences": 2,
            "mode": "evening",
            "language": "es",
            "mustIncludeName": True,
        },
    )

    assert response.status_code == 200
    prompt = fake_llm.prompts[0]
    assert "Escribe exactamente 2 oración(es) corta(s)." in prompt
    assert 'Use the user\'s name "Lucía"' in prompt
    assert not any(opener in prompt for opener in OPENER_BANK["evening"])
    assert client.app.state.opener_rotator.history("evening", "unknown") == ()


def test_invalid_values_are_clamped_not_rejected(make_client) -> None:
    client = make_client()

    response = client.post(URL, json={"sentences": 9, "mode": "noon", "tone": 1})

    assert response.status_code == 200


def test_malformed_json_returns_400(make_client) -> None:
    client = make_client()

    response = client.post(
        URL,
        content=b'{"mode": "morning",',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "invalid_json_body"
    assert error["message"] == "Invalid JSON body"


def test_json_body_is_decoded_without_json_content_type(make_client, fake_llm) -> None:
    client = make_client()

    response = client.post(
        URL,
        content=b'{"mode": "evening", "sentences": 2}',
        headers={"Content-Type": "text/plain;charset=UTF-8"},
    )

    assert response.status_code == 200
    assert INTENT_TEXT["en"]["close"] in fake_llm.prompts[0]
    assert "Write exactly 2 short sentence(s)." in fake_llm.prompts[0]


@pytest.mark.parametrize("raw", [b"[]", b'["evening"]', b"null", b"42", b'"evening"'])
def test_non_object_json_body_uses_defaults(make_client, fake_llm, raw: bytes) -> None:
    client = make_client()

    response = client.post(URL, content=raw, headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    assert INTENT_TEXT["en"]["orient"] in fake_llm.prompts[0]


def test_non_json_text_body_returns_400(make_client) -> None:
    client = make_client()

    response = client.post(URL, content=b"mode=evening", headers={"Content-Type": "text/plain"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_json_body"


def test_malformed_body_still_counts_against_quota(make_client) -> None:
    client = make_client(rate_limit_requests=1)

    bad = client.post(URL, content=b"{", headers={"Content-Type": "application/json"})
    good = client.post(URL, json={})

    assert bad.status_code == 400
    assert good.status_code == 429


def test_rate_limit_sequence_then_429(make_client) -> None:
    client = make_client(rate_limit_requests=3)
    headers = {"X-Forwarded-For": "203.0.113.7"}

    remaining = [client.post(URL, json={}, headers=headers).json()["meta"]["remaining"] for _ in range(3)]
    blocked = client.post(URL, json={}, headers=headers)

    assert remaining == [2, 1, 0]
    assert blocked.status_code == 429
    assert blocked.json()["detail"] == "Rate limit exceeded. Try again later."
    assert blocked.headers["X-RateLimit-Remaining"] == "0"
    assert int(blocked.headers["Retry-After"]) > 0


def test_rate_limit_headers_on_success(make_client) -> None:
    client = make_client(rate_limit_requests=5)

    response = client.post(URL, json={})

    assert response.headers["X-RateLimit-Limit"] == "5"
    assert response.headers["X-RateLimit-Remaining"] == "4"
    assert "Retry-After" not in response.headers


def test_rate_limit_is_per_client_ip(make_client) -> None:
    client = make_client(rate_limit_requests=1)

    first = client.post(URL, json={}, headers={"X-Forwarded-For": "198.51.100.1, 10.0.0.1"})
    blocked = client.post(URL, json={}, headers={"X-Forwarded-For": "198.51.100.1"})
    other = client.post(URL, json={}, headers={"X-Real-IP": "198.51.100.2"})

    assert first.status_code == 200
    assert blocked.status_code == 429
    assert other.status_code == 200


def test_clients_without_ip_headers_share_unknown_bucket(make_client) -> None:
    client = make_client(rate_limit_requests=1)

    assert client.post(URL, json={}).status_code == 200
    assert client.post(URL, json={}).status_code == 429


def test_rate_limit_disabled_reports_null_remaining(make_client) -> None:
    client = make_client(rate_limit_enabled=False, rate_limit_requests=1)

    responses = [client.post(URL, json={}) for _ in range(3)]

    assert all(r.status_code == 200 for r in responses)
    assert responses[-1].json()["meta"]["remaining"] is None


def test_missing_api_key_returns_500_without_consuming_quota(make_client) -> None:
    client = make_client(llm_client=None, rate_limit_requests=1)

    for _ in range(2):
        response = client.post(URL, json={})
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "llm_missing_api_key"

    assert client.app.state.rate_limiter.stats()["entries"] == 0


def test_empty_model_response_returns_502(make_client) -> None:
    client = make_client(llm_client=FakeLLMClient(text=""))

    response = client.post(URL, json={})

    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Empty response from model"


def test_upstream_failure_returns_502(make_client) -> None:
    error = LLMAppError(code="upstream_ai_error", message="Upstream AI error")
    client = make_client(llm_client=FakeLLMClient(error=error))

    response = client.post(URL, json={})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "upstream_ai_error"


def test_get_is_method_not_allowed(make_client) -> None:
    client = make_client()

    assert client.get(URL).status_code == 405


def test_bare_options_returns_200(make_client) -> None:
    client = make_client()

    assert client.options(URL).status_code == 200


def test_cors_preflight(make_client) -> None:
    client = make_client()

    response = client.options(
        URL,
        headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_cors_header_on_simple_request(make_client) -> None:
    client = make_client()

    response = client.post(URL, json={}, headers={"Origin": "https://app.example.com"})

    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("mode", ["morning", "afternoon", "evening", "bedtime"])
def test_openers_do_not_repeat_for_same_client(make_client, fake_llm, mode: str) -> None:
    # Every other draw repeats the previous pick and must be redrawn
    rng = ScriptedRandom(indices=[0, 0, 1, 1, 2, 2, 3, 3, 4])
    client = make_client(rng=rng, opener_history_cap=4)

    for _ in range(5):
        assert client.post(URL, json={"mode": mode}).status_code == 200

    history = client.app.state.opener_rotator.history(mode, "unknown")
    assert len(history) == 4
    assert len(set(history)) == 4


def test_health_reports_state_sizes(make_client) -> None:
    client = make_client()
    client.post(URL, json={}, headers={"X-Forwarded-For": "203.0.113.7"})

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "rate_limit_keys": 1,
        "opener_history_keys": 1,
    }
