"""Deterministic stand-in for a live model, used when no API key is configured."""

import logging
from typing_extensions import override

from vfs_agent_mcp.agent.provider import ModelProvider
from vfs_agent_mcp.models.transcript import ModelTurn, ToolCall, TurnRecord

logger = logging.getLogger(__name__)

COUNTER_COMPONENT = """import { useState } from "react";

export default function Counter() {
  const [count, setCount] = useState(0);

  return (
    <div className="counter">
      <h2>Counter</h2>
      <p>{count}</p>
      <button onClick={() => setCount(count - 1)}>Decrease</button>
      <button onClick={() => setCount(count + 1)}>Increase</button>
    </div>
  );
}
"""

FORM_COMPONENT = """import { useState } from "react";

export default function ContactForm() {
  const [form, setForm] = useState({ name: "", email: "", message: "" });

  const update = (field) => (event) => setForm({ ...form, [field]: event.target.value });

  return (
    <form className="contact-form" onSubmit={(event) => event.preventDefault()}>
      <h2>Contact Us</h2>
      <input placeholder="Name" value={form.name} onChange={update("name")} />
      <input placeholder="Email" value={form.email} onChange={update("email")} />
      <textarea placeholder="Message" value={form.message} onChange={update("message")} />
      <button type="submit">Send</button>
    </form>
  );
}
"""

CARD_COMPONENT = """export default function Card({ title = "Card", children }) {
  return (
    <div className="card">
      <h2>{title}</h2>
      <div>{children}</div>
    </div>
  );
}
"""

APP_TEMPLATE = """import {name} from "@/components/{name}";

export default function App() {{
  return (
    <div className="app">
      <{name} />
    </div>
  );
}}
"""

# keyword -> (component name, source, anchor to polish, replacement)
COMPONENTS: dict[str, tuple[str, str, str, str]] = {
    "form": ("ContactForm", FORM_COMPONENT, "<h2>Contact Us</h2>", "<h2>Get in touch</h2>"),
    "card": ("Card", CARD_COMPONENT, 'className="card"', 'className="card shadow"'),
    "counter": ("Counter", COUNTER_COMPONENT, "<h2>Counter</h2>", "<h2>Simple Counter</h2>"),
}


class MockModelProvider(ModelProvider):
    """
    Scaffolds a small React component in a fixed sequence of turns.

    Round 1 creates the component, round 2 polishes it with `str_replace`,
    round 3 writes `/App.jsx`, and round 4 answers with text only.
    """

    is_live = False

    @override
    def get_name(self) -> str:
        return "mock"

    @override
    async def next_turn(
        self,
        system_prompt: str,
        transcript: list[TurnRecord],
        tools: list[dict[str, object]],
    ) -> ModelTurn:
        prompt, step = self._current_request(transcript)
        name, source, anchor, replacement = self._pick_component(prompt)
        component_path = f"/components/{name}.jsx"
        logger.debug(f"Mock provider step {step} for component {name}")

        match step:
            case 1:
                return ModelTurn(
                    text=f"I'll create a {name} component.",
                    tool_calls=[
                        self._call(step, "str_replace_based_edit_tool", command="create", path=component_path, file_text=source),
                    ],
                )
            case 2:
                return ModelTurn(
                    text=f"Let me polish the {name} component.",
                    tool_calls=[
                        self._call(step, "str_replace_based_edit_tool", command="str_replace", path=component_path, old_str=anchor, new_str=replacement),
                    ],
                )
            case 3:
                return ModelTurn(
                    text="Now I'll wire it into the App entry point.",
                    tool_calls=[
                        self._call(step, "str_replace_based_edit_tool", command="create", path="/App.jsx", file_text=APP_TEMPLATE.format(name=name)),
                    ],
                )
            case _:
                return ModelTurn(
                    text=f"The {name} component is ready in {component_path} and rendered from /App.jsx.",
                )

    def _current_request(self, transcript: list[TurnRecord]) -> tuple[str, int]:
        """Latest user prompt and the 1-based step number within its reply."""
        prompt = ""
        step = 1
        for record in transcript:
            if record.role == "user":
                prompt = record.content
                step = 1
            elif record.role == "assistant":
                step += 1
        return prompt, step

    def _pick_component(self, prompt: str) -> tuple[str, str, str, str]:
        lowered = prompt.lower()
        for keyword, component in COMPONENTS.items():
            if keyword in lowered:
                return component
        return COMPONENTS["counter"]

    def _call(self, step: int, name: str, **arguments: object) -> ToolCall:
        return ToolCall(call_id=f"mock_{step}_{name}", name=name, arguments=arguments)
