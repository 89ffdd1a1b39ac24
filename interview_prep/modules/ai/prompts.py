"""Instruction strings sent to the model.

Both builders are pure: they embed their arguments verbatim and never
validate them; callers check for missing fields first.
"""

from __future__ import annotations


def question_answer_prompt(
    role: object,
    experience: object,
    topics_to_focus: object,
    number_of_questions: object,
) -> str:
    return (
        f"Generate {number_of_questions} interview question-answer pairs\n"
        f"for a {role} with {experience} years of experience.\n"
        f"Focus on: {topics_to_focus}.\n"
        "\n"
        "Each answer must be concise (2-3 sentences only).\n"
        "\n"
        "Return ONLY valid JSON in this exact format:\n"
        "[\n"
        '  { "question": "Question here?", "answer": "Answer here." },\n'
        "  ...\n"
        "]\n"
        "\n"
        "No backticks, no markdown, no extra text before or after the JSON.\n"
    )


def concept_explain_prompt(question: object) -> str:
    return (
        "You are an AI trained to generate explanations for a given interview question.\n"
        "\n"
        "Task:\n"
        "\n"
        "- Explain the following interview question and its concept in depth "
        "as if you're teaching a beginner developer.\n"
        f'- Question: "{question}"\n'
        "- After the explanation, provide a short and clear title that summarizes "
        "the concept for the article or page header.\n"
        "- If the explanation includes a code example, provide a small code block.\n"
        "- Keep the formatting very clean and clear.\n"
        "- Return the result as a valid JSON object in the following format:\n"
        "\n"
        "{\n"
        '    "title": "Short title here?",\n'
        '    "explanation": "Explanation here."\n'
        "}\n"
        "\n"
        "Important: Do NOT add any extra text outside the JSON format. "
        "Only return valid JSON.\n"
    )
