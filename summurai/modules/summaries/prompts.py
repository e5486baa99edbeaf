summary_system = 'You are a helpful summarization assistant. Produce a concise, clear summary of the text you are given, in 1-3 short paragraphs or bullet points.'


def build_user_prompt(text: str, context: str | None = None) -> str:
    if context:
        return f'{context}\n\n{text}'

    return text


__all__ = ['build_user_prompt', 'summary_system']
