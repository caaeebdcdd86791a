"""Nutrition chat backed by an LLM."""

import logging
from dataclasses import dataclass
from typing import Protocol

from rope_fitness.domain.chat import ChatMessage, ChatReply, ChatRequest
from rope_fitness.domain.errors import InvalidArgumentError
from rope_fitness.domain.profiles import ProfileRecord
from rope_fitness.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)

_ALLOWED_ROLES = {"user", "assistant", "system"}
_UNKNOWN = "unknown"

SETUP_REPLY = (
    "The nutrition assistant is not configured yet.\n\n"
    "To enable it:\n"
    "1. Create an OpenAI API key.\n"
    "2. Set it as OPENAI_API_KEY in the service environment.\n"
    "3. Redeploy the service.\n\n"
    "Meanwhile you can save your questions and ask them later."
)
ERROR_REPLY = (
    "Sorry, something went wrong while preparing a nutrition answer. "
    "Please try again later."
)
EMPTY_REPLY = "I couldn't get an answer from the model, please try again."


class ChatClient(Protocol):
    """Interface for chat completion models."""

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Return the assistant's reply text, if any."""


@dataclass
class NutritionChatService:
    """Service that builds nutrition prompts and relays model replies."""

    client: ChatClient | None
    profile_repository: ProfileRepository
    model: str
    temperature: float = 0.7
    max_tokens: int = 1000

    async def reply(self, request: ChatRequest) -> ChatReply:
        """Answer a chat request, enriching the prompt with the user's profile."""
        message, history = resolve_conversation(request)
        if self.client is None:
            return ChatReply(reply=SETUP_REPLY)

        profile = self._load_profile(request)
        messages = [
            {"role": "system", "content": build_system_prompt(profile)},
            *(
                {"role": _normalize_role(entry.role), "content": entry.content}
                for entry in history
            ),
            {"role": "user", "content": message},
        ]
        try:
            text = await self.client.complete(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception:
            _logger.exception("Nutrition chat completion failed")
            return ChatReply(reply=ERROR_REPLY)

        reply = text or EMPTY_REPLY
        return ChatReply(reply=reply, success=True, response=reply)

    def _load_profile(self, request: ChatRequest) -> ProfileRecord | None:
        if request.user_id is None:
            return None
        try:
            return self.profile_repository.get_profile(request.user_id)
        except Exception:
            _logger.exception(
                "Profile lookup failed for nutrition chat",
                extra={"user_id": str(request.user_id)},
            )
            return None


def resolve_conversation(request: ChatRequest) -> tuple[str, list[ChatMessage]]:
    """Return the message to answer and the history preceding it."""
    message = request.message
    history = request.history
    if not message and request.messages:
        last_user = next(
            (
                entry
                for entry in reversed(request.messages)
                if entry.role == "user" and entry.content.strip()
            ),
            None,
        )
        if last_user:
            message = last_user.content
        history = request.messages[:-1]

    if not message or not message.strip():
        raise InvalidArgumentError("Empty message")
    return message, history


def build_system_prompt(profile: ProfileRecord | None) -> str:
    """Describe the user to the model."""
    if profile is None:
        return _format_prompt(name="user")
    return _format_prompt(
        name=profile.name or "user",
        age=profile.age,
        gender=_gender_label(profile.gender),
        weight_kg=profile.weight_kg,
        target_weight_kg=profile.target_weight_kg,
        level=profile.current_level,
    )


def _format_prompt(  # noqa: PLR0913
    *,
    name: str,
    age: int | None = None,
    gender: str = _UNKNOWN,
    weight_kg: float | None = None,
    target_weight_kg: float | None = None,
    level: str | None = None,
) -> str:
    return (
        f"You are a nutrition expert. Your user is {name}:\n"
        f"- Age: {_or_unknown(age)}\n"
        f"- Gender: {gender}\n"
        f"- Current weight: {_or_unknown(weight_kg)} kg\n"
        f"- Target weight: {_or_unknown(target_weight_kg)} kg\n"
        f"- Fitness level: {_or_unknown(level)}\n\n"
        "Give personalized nutrition advice and recipes, "
        "and calculate calories when needed.\n"
        "Use warm, clear and simple language."
    )


def _gender_label(gender: str | None) -> str:
    if gender in {"male", "female"}:
        return gender
    return _UNKNOWN


def _or_unknown(value: object | None) -> object:
    return _UNKNOWN if value is None else value


def _normalize_role(role: str) -> str:
    return role if role in _ALLOWED_ROLES else "user"
