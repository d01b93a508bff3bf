"""
Suggestions — AI Providers

Thin synchronous clients for the Gemini, OpenAI and Anthropic REST APIs.
Each provider sends one prompt and returns the raw list of suggestion
objects the model produced. Any failure (network, HTTP status, missing
key, unparseable body) surfaces as ExternalServiceError; there are no
retries.

@file suggestions/providers.py
"""

import json
import logging
import re
from abc import ABC, abstractmethod

import requests
from django.conf import settings

from core.exceptions import ExternalServiceError

logger = logging.getLogger('econome')

_CODE_FENCE = re.compile(r'```(?:json)?\s*|```')


def parse_suggestions(text: str) -> list:
    """Decode a model reply: a JSON array, or an object with a 'suggestions' array."""
    cleaned = _CODE_FENCE.sub('', text or '').strip()
    try:
        parsed = json.loads(cleaned)
    except ValueError:
        raise ExternalServiceError(detail='AI provider returned malformed JSON.')
    if isinstance(parsed, dict):
        parsed = parsed.get('suggestions', [])
    if not isinstance(parsed, list):
        raise ExternalServiceError(detail='AI provider returned an unexpected payload.')
    return parsed


class BaseProvider(ABC):
    name = ''
    url = ''

    def __init__(self, *, api_key: str, model: str, timeout: float | None = None):
        if not api_key:
            raise ExternalServiceError(
                detail=f'API key is not configured for the {self.name} provider.',
            )
        self.api_key = api_key
        self.model = model
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT

    @abstractmethod
    def build_request(self, prompt: str) -> tuple[str, dict, dict]:
        """Return (url, headers, json body)."""

    @abstractmethod
    def extract_text(self, data: dict) -> str:
        """Pull the generated text out of the decoded response body."""

    def generate(self, prompt: str) -> list:
        url, headers, body = self.build_request(prompt)
        try:
            response = requests.post(url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error('%s request failed: %s', self.name, exc)
            raise ExternalServiceError(detail=f'{self.name} is unreachable: {exc}')

        if response.status_code != 200:
            logger.error('%s API error %s: %s', self.name, response.status_code, response.text[:200])
            raise ExternalServiceError(
                detail=f'{self.name} API error: HTTP {response.status_code}.',
            )
        try:
            text = self.extract_text(response.json())
        except (ValueError, KeyError, IndexError, TypeError):
            raise ExternalServiceError(detail=f'{self.name} returned an unexpected response.')
        if not text:
            raise ExternalServiceError(detail=f'No content in {self.name} response.')
        return parse_suggestions(text)


class GeminiProvider(BaseProvider):
    name = 'gemini'
    url = 'https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent'

    def build_request(self, prompt):
        headers = {'Content-Type': 'application/json', 'x-goog-api-key': self.api_key}
        body = {
            'contents': [{'parts': [{'text': prompt}]}],
            'generationConfig': {'responseMimeType': 'application/json'},
        }
        return self.url.format(model=self.model), headers, body

    def extract_text(self, data):
        return data['candidates'][0]['content']['parts'][0]['text']


class OpenAIProvider(BaseProvider):
    name = 'openai'
    url = 'https://api.openai.com/v1/chat/completions'

    def build_request(self, prompt):
        headers = {'Content-Type': 'application/json', 'Authorization': f'Bearer {self.api_key}'}
        body = {
            'model': self.model,
            'messages': [
                {
                    'role': 'system',
                    'content': (
                        'You are a helpful assistant that responds with valid JSON only. '
                        'Reply with an object whose "suggestions" key holds the array.'
                    ),
                },
                {'role': 'user', 'content': prompt},
            ],
            'response_format': {'type': 'json_object'},
            'temperature': 0.7,
        }
        return self.url, headers, body

    def extract_text(self, data):
        return data['choices'][0]['message']['content']


class AnthropicProvider(BaseProvider):
    name = 'anthropic'
    url = 'https://api.anthropic.com/v1/messages'
    api_version = '2023-06-01'

    def build_request(self, prompt):
        headers = {
            'Content-Type': 'application/json',
            'x-api-key': self.api_key,
            'anthropic-version': self.api_version,
        }
        body = {
            'model': self.model,
            'max_tokens': 4096,
            'messages': [
                {
                    'role': 'user',
                    'content': prompt + '\n\nRespond with a valid JSON array only, without any markdown formatting.',
                },
            ],
        }
        return self.url, headers, body

    def extract_text(self, data):
        return data['content'][0]['text']


PROVIDERS = {
    GeminiProvider.name: GeminiProvider,
    OpenAIProvider.name: OpenAIProvider,
    AnthropicProvider.name: AnthropicProvider,
}


def get_provider(app_settings) -> BaseProvider:
    """Instantiate the provider selected in AppSettings."""
    try:
        provider_class = PROVIDERS[app_settings.provider]
    except KeyError:
        raise ExternalServiceError(detail=f'Unsupported AI provider: {app_settings.provider}.')
    return provider_class(
        api_key=app_settings.api_key_for(),
        model=app_settings.effective_model,
    )
