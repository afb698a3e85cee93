#!/usr/bin/env python3
"""
Main entry point for the personatwin interview.
Allows running the package with: python -m personatwin
"""
import asyncio
import sys
from typing import Optional

from .config import get_config
from .infrastructure import build_chat_client
from .interview import DialogueOrchestrator, QuestionBank, ChatMessage, InterviewOutcome
from .twin import DigitalTwinPipeline, TwinModelService
from .utils import setup_logging


def print_message(message: ChatMessage):
    if message.is_bot:
        prefix = "   " if message.is_sub_prompt else "🤖"
        print(f"{prefix} {message.content}")


def print_progress(value: float):
    print(f"   ⏳ Building your digital twin... {int(value * 100)}%")


def print_outcome(outcome: InterviewOutcome):
    profile = outcome.profile
    print("\n" + "=" * 50)
    print("🧠 Your personality profile")
    print("=" * 50)
    for dimension, score in sorted(profile.dimensions.items(), key=lambda item: item[0].value):
        bar = "█" * int(round(score * 20))
        print(f"  {dimension.value:<22} {bar:<20} {score:.2f}")
    print(f"\n💬 Communication: {profile.communication_style.description} ({profile.communication_style.pace})")
    print(f"😄 Humor: {profile.humor_style.primary_type.value}")
    print(f"🤝 Social: {profile.social_style.energy}")
    if profile.comfort_topics:
        print(f"⭐ Comfort topics: {', '.join(profile.comfort_topics)}")
    if outcome.conversation_styles:
        print(f"🗣️  Style: {', '.join(outcome.conversation_styles)}")

    if outcome.twin is not None:
        print(f"\n🪞 Digital twin: {outcome.twin.core_personality.summary}")
        if outcome.twin.core_personality.key_traits:
            print(f"   Key traits: {', '.join(outcome.twin.core_personality.key_traits)}")
    elif outcome.twin_error:
        print(f"\n⚠️  {outcome.twin_error}")


async def read_line(prompt: str) -> Optional[str]:
    """Read one line without blocking the event loop. None on end of input."""
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


async def run_session(orchestrator: DialogueOrchestrator, pipeline: Optional[DigitalTwinPipeline]):
    await orchestrator.start()

    while not orchestrator.is_complete:
        suggestions = orchestrator.suggested_replies()
        if suggestions:
            print(f"   💡 {' | '.join(suggestions)}")
        text = await read_line("> ")
        if text is None or text.strip() == "/quit":
            print("\n👋 Interview stopped")
            return
        if text.strip() == "/skip":
            await orchestrator.skip_to_next()
            continue
        await orchestrator.submit_answer(text)

    print_outcome(orchestrator.outcome)

    if pipeline is not None and pipeline.generated_twin is not None:
        print("\n🗣️  Ask your twin anything (empty line to finish)")
        while True:
            prompt = await read_line("you> ")
            if not prompt or not prompt.strip():
                break
            reply = await pipeline.generate_sample_response(prompt)
            print(f"twin> {reply or 'Error generating response'}")


def main():
    """Command-line interface for the personality interview."""

    # Load configuration from environment
    try:
        config = get_config()
    except ValueError as e:
        print(f"❌ Configuration Error: {e}")
        sys.exit(1)

    enable_refinement = config.enable_twin_refinement
    enable_typing_delay = config.enable_typing_delay
    question_count = config.active_question_count
    for arg in sys.argv[1:]:
        if arg.startswith("--questions="):
            try:
                question_count = int(arg.split("=", 1)[1])
            except ValueError:
                print("❌ Invalid question count. Use --questions=N")
                sys.exit(1)
        elif arg == "--no-refine":
            enable_refinement = False
        elif arg == "--fast":
            enable_typing_delay = False
        else:
            print(f"❌ Unknown option: {arg}")
            print("   Options: --questions=N, --no-refine, --fast")
            sys.exit(1)

    try:
        log_file = setup_logging(config.log_file, config.log_level)
    except ValueError as e:
        print(f"❌ Configuration Error: {e}")
        sys.exit(1)

    bank = QuestionBank(active_question_count=question_count)

    pipeline = None
    if enable_refinement:
        client = build_chat_client(config)
        if client is None:
            print("📝 No API credential found - the profile will be built locally")
        else:
            pipeline = DigitalTwinPipeline(
                TwinModelService(client, bank.all_questions()),
                on_progress=print_progress,
            )

    orchestrator = DialogueOrchestrator(
        question_bank=bank,
        pipeline=pipeline,
        enable_refinement=enable_refinement,
        enable_typing_delay=enable_typing_delay,
        on_message=print_message,
    )

    print(f"\n🎙️  Starting interview - {bank.active_question_count} questions")
    print(f"📝 Detailed logs: {log_file}")
    print("   (Type /skip to skip a question, /quit to stop)")
    print("=" * 50)

    try:
        asyncio.run(run_session(orchestrator, pipeline))
    except KeyboardInterrupt:
        print("\n👋 Interview stopped")


if __name__ == "__main__":
    main()
