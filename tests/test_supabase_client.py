from nani_connect import supabase_client


def test_anon_client_is_fresh_and_does_not_auto_refresh(monkeypatch):
    calls = []
    monkeypatch.setattr(supabase_client, "create_client", lambda url, key, options=None: calls.append((url, key, options)) or object())

    first = supabase_client.get_supabase_anon_client()
    second = supabase_client.get_supabase_anon_client()

    assert first is not second
    url, key, options = calls[0]
    assert (url, key) == ("https://test.supabase.co", "anon-key")
    assert options.auto_refresh_token is False
    assert options.persist_session is False
