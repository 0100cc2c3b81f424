"""
Intake Messages - scripted coach replies shown around plan generation.
"""

GENERATING = "Amazing! I have all the information I need. Let me create your personalized diet plan..."

SUCCESS = (
    "Perfect! Your personalized diet plan has been created and sent to your WhatsApp number. "
    "You should receive it within the next few minutes!"
)

FOLLOW_UP = (
    "🎉 Your journey to better health starts now! Our team will also reach out to you soon "
    "with exclusive gym offers and additional support."
)

CONFIGURATION_ERROR = (
    "⚠️ Configuration Error: The OpenAI API key is not properly configured. "
    "Please contact the administrator to set up the API key in the .env file.\n\n"
    "To fix this:\n"
    "1. Get an API key from https://platform.openai.com/api-keys\n"
    "2. Add it to the .env file as OPENAI_API_KEY\n"
    "3. Restart the server"
)

GENERIC_ERROR = (
    "I apologize, but there was an error generating your diet plan. "
    "Please try again or contact our support team."
)


def is_configuration_error(error_message: str) -> bool:
    """Configuration failures mention the API key; everything else is generic."""
    return "OpenAI API key" in error_message


def error_reply(error_message: str) -> str:
    """Pick the coach reply for a failed generation."""
    if is_configuration_error(error_message):
        return CONFIGURATION_ERROR
    return GENERIC_ERROR
