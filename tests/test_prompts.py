from pr_reviewer.review.prompts import build_chat_prompt, build_review_prompt


def test_build_prompt_lists_sections_in_order():
    prompt = build_review_prompt("File: a.py\n+x = 1\n\n")

    positions = [prompt.index(marker) for marker in ("SUMMARY:", "POTENTIAL BUGS:", "SUGGESTIONS:", "TEST CASES:")]
    assert positions == sorted(positions)
    assert "on a new line with a dash" in prompt


def test_build_prompt_appends_diff_verbatim():
    diff_text = "File: a.py\n+x = {'unescaped': \"quotes\"}\n\n" * 500

    prompt = build_review_prompt(diff_text)

    assert prompt.endswith(diff_text)


def test_build_chat_prompt_without_history():
    prompt = build_chat_prompt(
        "what does this do?",
        {"owner": "octo", "repo": "repo", "prNumber": 9, "review": {"summary": "s"}},
    )

    assert "Owner: octo" in prompt
    assert "Repo: repo" in prompt
    assert "PR Number: 9" in prompt
    assert '"summary": "s"' in prompt
    assert "Previous conversation history:\nNone" in prompt
