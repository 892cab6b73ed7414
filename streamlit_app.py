"""InspectorAI - Streamlit App with Chat UI."""

import os
import streamlit as st
from dotenv import load_dotenv

from config.settings import Settings
from orchestrator import InspectionAssistant
from react.prompts import WELCOME_MESSAGE, history_request


load_dotenv()

st.set_page_config(
    page_title="InspectorAI",
    page_icon="🛠️",
    layout="wide"
)

# Initialize session state
if "messages" not in st.session_state:
    st.session_state.messages = []

if "assistant" not in st.session_state:
    st.session_state.assistant = None

if "assistant_config" not in st.session_state:
    st.session_state.assistant_config = None


def reset_conversation():
    """Reset conversation state, keeping the loaded record set."""
    st.session_state.messages = []
    if st.session_state.assistant is not None:
        st.session_state.assistant.reset()


def queue_prompt(prompt: str):
    """Queue a prompt to be sent on the next rerun."""
    st.session_state.pending_prompt = prompt


def get_assistant(settings: Settings) -> InspectionAssistant:
    """Get or create the assistant; rebuilt when the configuration changes."""
    config = settings.model_dump(exclude={"verbose"})
    if st.session_state.assistant is None or st.session_state.assistant_config != config:
        st.session_state.assistant = InspectionAssistant(settings=settings)
        st.session_state.assistant_config = config
        st.session_state.messages = []
    return st.session_state.assistant


# Sidebar configuration
st.sidebar.header("Configuration")

# LLM Provider selection
llm_provider = st.sidebar.selectbox(
    "LLM Provider",
    options=["gemini", "openai", "anthropic"],
    index=0,
    help="Select which LLM answers questions"
)

api_key_env = {
    "gemini": os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY") or os.environ.get("API_KEY"),
    "openai": os.environ.get("OPENAI_API_KEY"),
    "anthropic": os.environ.get("ANTHROPIC_API_KEY"),
}

api_key = st.sidebar.text_input(
    f"{llm_provider.capitalize()} API Key",
    value=api_key_env[llm_provider] or "",
    type="password",
    help="Required for the selected provider"
)

st.sidebar.markdown("---")

# Advanced settings
with st.sidebar.expander("Advanced Settings"):
    llm_model = st.text_input(
        "Model override",
        value="",
        help="Leave empty for the provider's default model"
    )

    max_tool_rounds = st.slider(
        "Max tool rounds per question",
        min_value=1,
        max_value=10,
        value=5
    )

    parallel_tool_calls = st.checkbox(
        "Run tool calls in parallel",
        value=True
    )

    dataset_seed = st.number_input(
        "Dataset seed",
        min_value=0,
        value=42,
        step=1,
        help="Same seed, same synthetic inspection records"
    )

    show_debug = st.checkbox("Show debug info", value=False)

# New Conversation button
if st.sidebar.button("Start New Conversation", type="secondary"):
    reset_conversation()
    st.rerun()

settings = Settings(
    llm_provider=llm_provider,
    llm_model=llm_model or None,
    **{f"{llm_provider}_api_key": api_key or None},
    max_tool_rounds=max_tool_rounds,
    parallel_tool_calls=parallel_tool_calls,
    dataset_seed=int(dataset_seed),
    verbose=show_debug,
)
assistant = get_assistant(settings)

# Display conversation info
st.sidebar.markdown("---")
st.sidebar.caption(f"Session ID: {assistant.session.session_id[:8]}...")
st.sidebar.caption(f"Equipment records: {len(assistant.store)}")

# Asset browser
st.sidebar.markdown("---")
asset_filter = st.sidebar.text_input(
    "Filter assets",
    value="",
    placeholder="Search assets, type, or location..."
)
assets = assistant.store.filter_equipment(asset_filter)
st.sidebar.subheader(f"Assets ({len(assets)})")

if not assets:
    st.sidebar.caption("No matching assets found.")

for asset in assets:
    label = f"{asset.name} \u00b7 {asset.equipment_type.value}"
    if asset_filter.strip():
        label += f" \u00b7 {asset.location}"
    st.sidebar.button(
        label,
        key=f"asset-{asset.id}",
        on_click=queue_prompt,
        args=(history_request(asset.name),),
        use_container_width=True
    )

# Main content
st.title("InspectorAI")
st.markdown("Chat with your equipment inspection database")

# Display chat messages
for message in st.session_state.messages:
    with st.chat_message(message["role"]):
        st.markdown(message["content"])

# Welcome message if no messages
if not st.session_state.messages:
    with st.chat_message("assistant"):
        st.markdown(WELCOME_MESSAGE)

# Chat input (typed, or queued by an asset button)
prompt = st.chat_input("Ask about equipment, findings or inspection reports...")
if not prompt:
    prompt = st.session_state.pop("pending_prompt", None)

if prompt:
    st.session_state.messages.append({"role": "user", "content": prompt})

    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        with st.spinner("Thinking..."):
            response = assistant.send_message(prompt)

        st.markdown(response)
        st.session_state.messages.append({"role": "assistant", "content": response})

        if show_debug:
            if assistant.llm_client:
                st.info(f"LLM: {assistant.llm_client.get_provider_name()} ({assistant.llm_client.get_model_name()})")
            else:
                st.info("LLM: Disabled (no API key)")
            result = assistant.last_result
            if result:
                st.info(f"Rounds used: {result.rounds_used}")
                st.info(f"Tools called: {', '.join(result.tools_called) or 'none'}")
                with st.expander("Tool steps"):
                    st.json([step.model_dump(mode="json") for step in result.steps])

# Footer
st.sidebar.markdown("---")
st.sidebar.markdown("Built with Streamlit")
