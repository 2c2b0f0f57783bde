"""
Chatbot — Gradio UI
===================
Single-file Gradio Blocks chat widget. Every turn goes through the backend
HTTP API (``CHAT_API_URL``), which stores the conversation and picks the reply.
"""

import sys, os, logging, datetime
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "backend"))

import gradio as gr
import httpx
from settings import settings

logger = logging.getLogger("chatbot.ui")

WELCOME_MESSAGE = "Hello! I'm your chatbot assistant. How can I help you today?"
ERROR_MESSAGE = "Sorry, I encountered an error. Please try again."


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------
def _make_client() -> httpx.Client:
    return httpx.Client(base_url=settings.get_chat_api_url(), timeout=10.0)


def _stamp() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


def _bubble(role: str, text: str) -> dict:
    """Chat message with its local time shown underneath."""
    return {"role": role, "content": f"{text}\n\n<sub>{_stamp()}</sub>"}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------
def start_conversation(client: httpx.Client | None = None):
    """Creates a backend conversation. Returns (chat_history, conv_id)."""
    own_client = client is None
    client = client or _make_client()
    try:
        r = client.post("/conversations")
        r.raise_for_status()
        conv_id = r.json()["conversationId"]
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.error("Error initializing conversation: %s", e)
        return [], ""
    finally:
        if own_client:
            client.close()
    return [_bubble("assistant", WELCOME_MESSAGE)], conv_id


def send_message(user_input: str, chat_history: list, conv_id: str, client: httpx.Client | None = None):
    """
    Gradio submit handler.
    Returns (chat_history, textbox_value). The textbox is cleared once a message is sent.
    """
    if not (user_input or "").strip() or not conv_id:
        return chat_history, user_input

    chat_history = list(chat_history) + [_bubble("user", user_input)]

    own_client = client is None
    client = client or _make_client()
    try:
        r = client.post("/chat", json={"message": user_input, "conversationId": conv_id})
        r.raise_for_status()
        reply = r.json()["response"]
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.error("Error sending message: %s", e)
        reply = ERROR_MESSAGE
    finally:
        if own_client:
            client.close()

    chat_history.append(_bubble("assistant", reply))
    return chat_history, ""


def new_chat():
    return start_conversation()


# ---------------------------------------------------------------------------
# Build Gradio UI
# ---------------------------------------------------------------------------
def create_app():
    with gr.Blocks(title="AI Chatbot", fill_height=True) as app:
        conv_id_state = gr.State("")

        gr.Markdown("## 🤖 AI Chatbot")

        chatbot = gr.Chatbot(
            label="Chat",
            height="70vh",
            render_markdown=True,
        )

        with gr.Row():
            msg_input = gr.Textbox(
                placeholder="Type your message...",
                show_label=False,
                scale=8,
            )
            send_btn = gr.Button("Send", variant="primary", scale=1)
        new_chat_btn = gr.Button("➕  New Chat", size="sm")

        # ============ EVENT WIRING ============
        for trigger in (msg_input.submit, send_btn.click):
            trigger(
                fn=send_message,
                inputs=[msg_input, chatbot, conv_id_state],
                outputs=[chatbot, msg_input],
            )

        new_chat_btn.click(
            fn=new_chat,
            inputs=None,
            outputs=[chatbot, conv_id_state],
        )

        app.load(
            fn=start_conversation,
            inputs=None,
            outputs=[chatbot, conv_id_state],
        )

    return app


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=settings.get_log_level())
    app = create_app()
    app.launch(
        server_name="0.0.0.0",
        server_port=settings.get_ui_port(),
        share=False,
        show_error=True,
    )
