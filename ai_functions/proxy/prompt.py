from __future__ import annotations

SYSTEM_PROMPT = (
    "You are a helpful assistant for a website called Javasim. "
    "Keep your answers concise and relevant to the user's query."
)

NO_RESPONSE_FALLBACK = "No response received from AI."
