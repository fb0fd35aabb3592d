from dataclasses import dataclass
from typing import Dict, List


@dataclass
class ChatPrompt:
    """A single-turn prompt: the fixed system instruction plus the user's message."""
    system: str
    user: str

    def to_messages(self) -> List[Dict[str, str]]:
        messages = []
        if self.system:
            messages.append({"role": "system", "content": self.system})
        messages.append({"role": "user", "content": self.user})
        return messages
