from rakshak.core.rate_limit import Limit, TokenBucketLimiter, limit_for, path_group


def _enable(monkeypatch, *, burst: str = "1") -> None:
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "true")
    monkeypatch.setenv("RATE_LIMIT_RPS", "0.1")
    monkeypatch.setenv("RATE_LIMIT_BURST", burst)
    monkeypatch.setenv("RATE_LIMIT_AUTH_RPS", "0.1")
    monkeypatch.setenv("RATE_LIMIT_AUTH_BURST", burst)


def test_login_throttled(client, monkeypatch):
    _enable(monkeypatch)
    payload = {"username": "nobody", "password": "nothing"}
    resp1 = client.post("/api/auth/login", json=payload)
    resp2 = client.post("/api/auth/login", json=payload)
    assert resp1.status_code == 401
    assert resp2.status_code == 429
    assert resp2.json() == {"error": "Too Many Requests"}
    assert int(resp2.headers["Retry-After"]) >= 1


def test_buckets_are_per_route_group(client, citizen, monkeypatch):
    _enable(monkeypatch)
    headers = citizen["headers"]
    assert client.get("/api/fir/my-firs", headers=headers).status_code == 200
    assert client.get("/api/fir/my-firs", headers=headers).status_code == 429
    assert client.get("/api/complaint/my-complaints", headers=headers).status_code == 200


def test_sos_alerts_never_throttled(client, citizen, monkeypatch):
    _enable(monkeypatch)
    alert = {"alert_type": "SOS", "latitude": 18.5, "longitude": 73.8}
    for _ in range(3):
        resp = client.post("/api/emergency/alert", json=alert, headers=citizen["headers"])
        assert resp.status_code == 201


def test_rate_limit_disabled_by_default_in_dev(client, monkeypatch):
    monkeypatch.delenv("RATE_LIMIT_ENABLED", raising=False)
    monkeypatch.setenv("RATE_LIMIT_AUTH_BURST", "1")
    payload = {"username": "nobody", "password": "nothing"}
    for _ in range(3):
        assert client.post("/api/auth/login", json=payload).status_code == 401


def test_path_group():
    assert path_group("/api/fir/track/FIR1") == "/api/fir"
    assert path_group("/api/auth/login") == "/api/auth"
    assert path_group("/docs") == "/docs"
    assert path_group("/") == "/"


def test_auth_group_uses_stricter_defaults(monkeypatch):
    for name in ("RATE_LIMIT_RPS", "RATE_LIMIT_BURST", "RATE_LIMIT_AUTH_RPS", "RATE_LIMIT_AUTH_BURST"):
        monkeypatch.delenv(name, raising=False)
    assert limit_for("/api/auth") == Limit(rps=1.0, burst=5)
    assert limit_for("/api/fir") == Limit(rps=5.0, burst=20)


def test_bucket_refills_over_time():
    clock = [100.0]
    limiter = TokenBucketLimiter(clock=lambda: clock[0])
    limit = Limit(rps=1.0, burst=1)

    assert limiter.allow("k", limit) == (True, 0.0)
    allowed, retry_after = limiter.allow("k", limit)
    assert allowed is False
    assert retry_after > 0
    clock[0] += 1.5
    assert limiter.allow("k", limit)[0] is True
