from daywise.core.config import Settings
from daywise.routers.ai.config import FallbackThresholds


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("OLLAMA_URL", "http://gpu-box:11434")
    monkeypatch.setenv("FALLBACK_PROTEIN_THRESHOLD", "30")
    monkeypatch.setenv("AI_LLM_ENABLED", "false")
    settings = Settings()
    assert settings.ollama_url == "http://gpu-box:11434"
    assert settings.fallback_protein_threshold == 30
    assert settings.ai_llm_enabled is False


def test_fallback_thresholds_from_settings():
    thresholds = FallbackThresholds.from_settings(
        Settings(fallback_protein_threshold=25, fallback_fiber_threshold=10, fallback_calorie_threshold=300)
    )
    assert thresholds == FallbackThresholds(protein=25, fiber=10, calories=300)
