"""Event classification service - single source of truth for action types."""

from invader_news.parsers.utils import ACTION_EMOJI, ACTION_KEYWORDS, INVADER_ID_RE
from invader_news.schemas import ActionType, SpaceInvaderEvent


class EventClassifier:
    """Turns the body of one day fragment into Space Invader events.

    Classification Strategy:
    1. Collect every Space Invader id in the body, first occurrence wins
    2. Lower-case the body and walk ACTION_KEYWORDS in order
    3. The first keyword found decides the action for the whole fragment
    4. Default to ActionType.UNKNOWN if no keyword matches

    A fragment that reports a destruction and a new mosaic under different
    ids labels both with the same action. The page does not say which
    verb belongs to which id.
    """

    @staticmethod
    def extract_ids(body: str) -> list[str]:
        """Return the unique ids in *body*, in first-seen order."""
        return list(dict.fromkeys(INVADER_ID_RE.findall(body)))

    @staticmethod
    def classify(body: str) -> ActionType:
        lowered = body.lower()
        for keyword, action in ACTION_KEYWORDS:
            if keyword in lowered:
                return action
        return ActionType.UNKNOWN

    @staticmethod
    def emoji_for(action: ActionType) -> str:
        return ACTION_EMOJI[action]

    @classmethod
    def build_events(cls, body: str) -> list[SpaceInvaderEvent]:
        """Classify *body* and return one event per unique id.

        Returns an empty list when the body holds no id.
        """
        ids = cls.extract_ids(body)
        if not ids:
            return []

        action = cls.classify(body)
        emoji = cls.emoji_for(action)
        return [SpaceInvaderEvent(id=invader_id, type=action, emoji=emoji) for invader_id in ids]
