"""Test provider status models."""

from tutor_ai.models.provider import ModelSelection, ProviderStatus, ProviderTestResult


class TestProviderModels:
    """Test provider status models."""

    def test_should_create_provider_status(self):
        """Test status fields."""
        status = ProviderStatus(name="Gemini", available=True, key="gemini")
        assert status.model_dump() == {"name": "Gemini", "available": True, "key": "gemini"}

    def test_should_create_model_selection(self):
        """Test model selection fields."""
        selection = ModelSelection(provider="openai", model_key="advanced", model="gpt-4o")
        assert selection.model_key == "advanced"

    def test_should_create_test_result(self):
        """Test smoke test result."""
        result = ProviderTestResult(provider="groq", success=False, message="failed")
        assert result.success is False
