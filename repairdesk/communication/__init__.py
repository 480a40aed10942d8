import os

from langchain_google_genai import ChatGoogleGenerativeAI

from repairdesk.communication.interface import TextGenerator
from repairdesk.communication.langchain_engine import LangChainTextGenerator

__all__ = ["LangChainTextGenerator", "TextGenerator", "create_generator"]

GEMINI_MODEL = os.environ.get("REPAIRDESK_GEMINI_MODEL", "gemini-2.5-flash")


def create_generator() -> TextGenerator:
    """Create a text generator backed by Google Gemini (reads GOOGLE_API_KEY)."""
    llm = ChatGoogleGenerativeAI(model=GEMINI_MODEL, temperature=0.3)
    return LangChainTextGenerator(llm)
