"""Basic health check tests."""

from unittest.mock import patch


def test_import_fitlead():
    """Test that fitlead package can be imported."""
    import fitlead
    assert fitlead.__version__ == "1.0.0"


def test_import_intake():
    import intake
    assert len(intake.QUESTIONS) == 10


def test_settings_flags():
    """Optional providers gate independently."""
    from fitlead.config import Settings

    settings = Settings(
        supabase_url="https://x.supabase.co",
        supabase_anon_key="anon",
        openai_api_key="your_openai_api_key_here",
        twilio_account_sid="AC123",
        twilio_auth_token="token",
        twilio_whatsapp_number="whatsapp:+14155238886",
        _env_file=None,
    )
    assert settings.generation_configured is False
    assert settings.messaging_configured is True
    assert settings.sheets_configured is False


def test_placeholder_keys_are_not_real():
    from fitlead.config import is_real_api_key

    assert not is_real_api_key(None)
    assert not is_real_api_key("")
    assert not is_real_api_key("dummy-key-for-build")
    assert not is_real_api_key("your_openai_api_key_here")
    assert is_real_api_key("sk-live-abc")


def test_unconfigured_twilio_builds_simulated_notifier():
    from fitlead.config import Settings
    from fitlead.messaging import SimulatedNotifier, build_notifier

    settings = Settings(supabase_url="https://x.supabase.co", supabase_anon_key="anon", _env_file=None)
    assert isinstance(build_notifier(settings), SimulatedNotifier)


def test_unconfigured_sheets_disabled():
    from fitlead.config import Settings
    from fitlead.sheets import build_lead_sheet

    settings = Settings(supabase_url="https://x.supabase.co", supabase_anon_key="anon", _env_file=None)
    assert build_lead_sheet(settings) is None


def test_broken_sheets_credentials_disable_sink():
    from fitlead.config import Settings
    from fitlead.sheets import build_lead_sheet

    settings = Settings(
        supabase_url="https://x.supabase.co",
        supabase_anon_key="anon",
        google_service_account_email="svc@example.iam.gserviceaccount.com",
        google_private_key="not-a-key",
        google_sheet_id="sheet-1",
        _env_file=None,
    )
    with patch("fitlead.sheets.gspread.service_account_from_dict", side_effect=ValueError("bad key")):
        assert build_lead_sheet(settings) is None


def test_health_endpoint():
    from fastapi.testclient import TestClient
    from fitlead.web.app import app

    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": "1.0.0"}
