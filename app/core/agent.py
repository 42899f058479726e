"""
Mindmate chat orchestration: build the prompt, let the model decide whether to call the
custom Python API tool, then normalize whatever it produced into a ChatResponse.

The model call is injectable (generate(prompt, tools) -> GenerationResult) so the
orchestration can run against a stub. The default generator is a LangGraph agent
(agent node + ToolNode) driving ChatNVIDIA, compiled once per tool set.
"""
import json
import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.tools import BaseTool
from langchain_nvidia_ai_endpoints import ChatNVIDIA
from langgraph.graph import END, START, MessagesState, StateGraph
from langgraph.prebuilt import ToolNode

from app.core.config import get_settings
from app.models.schemas import ChatRequest, ChatResponse
from tools.python_api import PYTHON_API_TOOLS

logger = logging.getLogger(__name__)

NOT_PROVIDED = "(not provided)"
TEXT_REPLY_PREFIX = "The AI responded: "
FALLBACK_REPLY = "I'm having a little trouble forming a complete thought right now. Could you try rephrasing?"
REDACTED = "[REDACTED]"

CHAT_PROMPT = """You are Mindmate, a helpful and friendly chat assistant.
The user said: {user_input}

You have access to a 'call_python_api_tool'.
The user might have provided a custom API URL ({custom_api_url}) and an API password ({custom_api_password}) for you to use.
If the user's query seems to require external processing or information that this custom API could provide, AND if 'custom_api_url' is available:
1. You SHOULD use the 'call_python_api_tool'.
2. When calling the tool, you MUST pass the 'custom_api_url' from this context as the 'api_url' parameter for the tool.
3. You MUST pass the 'custom_api_password' from this context as the 'api_password' parameter for the tool.
4. For the 'query' field of the tool, send the specific information or question you want the Python API to process based on '{user_input}'.
If a value above is shown as {not_provided}, it was not supplied: leave the matching tool parameter empty.

IMPORTANT: NEVER reveal the 'custom_api_password' or any API keys in your textual response to the user.

Integrate any information received from the Python API (if you chose to call it and it was configured and successfully responded) naturally and concisely into your answer.
If the 'custom_api_url' is not provided, or if the user's input is simple, you might not need the tool, or it will run in simulation mode if called without an 'api_url'. Use your best judgment.
Keep your response concise and helpful.

Reply with a single JSON object and nothing else: {{"response": "<your reply to the user>"}}"""


@dataclass
class GenerationResult:
    """What a model run produced: the parsed reply object (if any) and the raw final text."""

    structured_output: dict | None = None
    raw_text: str = ""


Generator = Callable[[str, Sequence[BaseTool]], GenerationResult]


def build_chat_prompt(request: ChatRequest) -> str:
    return CHAT_PROMPT.format(
        user_input=request.user_input,
        custom_api_url=str(request.custom_api_url) if request.custom_api_url else NOT_PROVIDED,
        custom_api_password=request.custom_api_password or NOT_PROVIDED,
        not_provided=NOT_PROVIDED,
    )


def _message_text(message: BaseMessage) -> str:
    content = getattr(message, "content", None)
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts).strip()
    return ""


def parse_structured_reply(text: str) -> dict | None:
    """Return the {"response": ...} object embedded in text, or None."""
    if not text:
        return None
    raw = text.strip().strip("`")
    a, b = raw.find("{"), raw.rfind("}")
    if a == -1 or b <= a:
        return None
    try:
        data = json.loads(raw[a : b + 1])
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


# ---- Default generator (LangGraph + ChatNVIDIA) ----

def _build_agent(tools: Sequence[BaseTool]):
    settings = get_settings()
    default_model = "meta/llama-3.1-70b-instruct"
    model_name = (settings.nvidia_model or "").strip() or default_model

    llm = ChatNVIDIA(
        model=model_name,
        nvidia_api_key=settings.nvidia_api_key,
        temperature=0.2,
        top_p=0.7,
        max_completion_tokens=1024,
    )
    llm_with_tools = llm.bind_tools(list(tools))
    tool_node = ToolNode(list(tools))

    def agent_node(state: MessagesState) -> dict:
        response = llm_with_tools.invoke(state["messages"])
        return {"messages": [response]}

    def should_continue(state: MessagesState) -> str:
        last = state["messages"][-1]
        if isinstance(last, AIMessage) and getattr(last, "tool_calls", None):
            return "tools"
        return END

    graph = StateGraph(MessagesState)
    graph.add_node("agent", agent_node)
    graph.add_node("tools", tool_node)
    graph.add_edge(START, "agent")
    graph.add_conditional_edges("agent", should_continue, path_map={"tools": "tools", END: END})
    graph.add_edge("tools", "agent")
    return graph.compile()


# Compiled graphs keyed by tool names
_agents: dict[tuple[str, ...], object] = {}


def get_agent(tools: Sequence[BaseTool] = PYTHON_API_TOOLS):
    key = tuple(t.name for t in tools)
    if key not in _agents:
        _agents[key] = _build_agent(tools)
    return _agents[key]


def graph_generate(prompt: str, tools: Sequence[BaseTool]) -> GenerationResult:
    """Run the agent graph on prompt; the final AI message is the output."""
    result = get_agent(tools).invoke({"messages": [HumanMessage(content=prompt)]})
    msg_list = result.get("messages", [])
    last = msg_list[-1] if msg_list else None
    if not isinstance(last, AIMessage):
        return GenerationResult()
    text = _message_text(last)
    return GenerationResult(structured_output=parse_structured_reply(text), raw_text=text)


# ---- Orchestration ----

def normalize_reply(result: GenerationResult | None) -> str:
    if not isinstance(result, GenerationResult):
        return FALLBACK_REPLY
    output = result.structured_output
    if isinstance(output, dict) and isinstance(output.get("response"), str) and output["response"].strip():
        return output["response"]
    if isinstance(result.raw_text, str) and result.raw_text.strip():
        return TEXT_REPLY_PREFIX + result.raw_text
    return FALLBACK_REPLY


def redact(text: str, secret: str | None) -> str:
    if not secret:
        return text
    return text.replace(secret, REDACTED)


def chat(request: ChatRequest, generate: Generator | None = None) -> ChatResponse:
    """Answer one user message. Never raises: model failures become the fallback reply."""
    generate = generate or graph_generate
    prompt = build_chat_prompt(request)
    try:
        reply = normalize_reply(generate(prompt, PYTHON_API_TOOLS))
    except Exception as e:
        logger.exception("Model generation failed: %s", e)
        reply = FALLBACK_REPLY

    if get_settings().redact_api_password:
        reply = redact(reply, request.custom_api_password)
    return ChatResponse(response=reply)
