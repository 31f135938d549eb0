#!/usr/bin/env python3
"""
Automated pull request review with Claude.

Run by .github/workflows/pr-review.yml. The workflow writes the PR diff and
changed file list to disk, passes PR metadata through the environment, and
posts pr-review.md as a PR comment afterwards.

Environment:
    ANTHROPIC_API_KEY   required
    PR_TITLE, PR_AUTHOR, PR_NUMBER, PR_ADDITIONS, PR_DELETIONS, PR_BODY
    REVIEW_MODEL        optional model override

Usage:
    uv run python scripts/lib/review_pr.py
    uv run python scripts/lib/review_pr.py --diff pr-diff.txt --files changed-files.txt
"""

import argparse
import os
import sys
from datetime import date
from pathlib import Path

MAX_DIFF_LENGTH = 100000
DEFAULT_MODEL = 'claude-sonnet-4-20250514'
MAX_TOKENS = 4096
TEMPERATURE = 0.3

DEFAULT_DIFF_FILE = Path('pr-diff.txt')
DEFAULT_FILES_FILE = Path('changed-files.txt')
DEFAULT_OUTPUT_FILE = Path('pr-review.md')


def pr_info_from_env(env=None) -> dict:
    """Collect PR metadata from the workflow environment."""
    env = os.environ if env is None else env
    return {
        'title': env.get('PR_TITLE', ''),
        'author': env.get('PR_AUTHOR', 'unknown'),
        'number': env.get('PR_NUMBER', '?'),
        'additions': env.get('PR_ADDITIONS', '0'),
        'deletions': env.get('PR_DELETIONS', '0'),
        'body': env.get('PR_BODY', '') or '(no description)',
    }


def truncate_diff(diff: str, limit: int = MAX_DIFF_LENGTH) -> str:
    if len(diff) <= limit:
        return diff
    print(f"Diff too large ({len(diff)} chars), truncating to {limit} chars")
    return diff[:limit] + '\n\n... (diff truncated due to length)'


def build_prompt(pr: dict, changed_files: list[str], diff: str) -> str:
    """Prompt asking for a structured markdown review."""
    files_text = '\n'.join(f"- {f}" for f in changed_files) or '- (none)'
    return f"""You are reviewing a GitHub pull request for Country TV, a small
24/7 country-music video site (Python scrapers, a playlist merger, a web
server and a browser player).

# Pull Request

**Title**: {pr['title']}
**Author**: @{pr['author']}
**PR Number**: #{pr['number']}
**Description**: {pr['body']}

**Changes**: +{pr['additions']} / -{pr['deletions']} lines in {len(changed_files)} files

**Changed files**:
{files_text}

# Diff

```diff
{diff}
```

# Review format

1. Overall assessment: what the PR does in 1-2 sentences, code quality
   (Excellent / Good / Needs Work / Requires Changes), and a recommendation
   (Approve / Request Changes / Needs Discussion).
2. Strengths: 2-5 points.
3. Review areas: security, performance, potential bugs (with file:line
   references), code quality, tests.
4. Issues, grouped as Critical (must fix), Warning (should fix) and
   Suggestion, each with location, issue, impact and a concrete fix.
5. Final verdict: rating, recommendation, risk level (Low / Medium / High)
   and the main action before merging.

Be specific and constructive. Prioritise correctness and security over
style. Reply in markdown ready to post as a GitHub comment."""


def review_text(response) -> str:
    """Join the text blocks of a Messages API response."""
    parts = [block.text for block in response.content if getattr(block, 'type', None) == 'text']
    return '\n'.join(parts).strip()


def request_review(client, prompt: str, model: str = DEFAULT_MODEL) -> str:
    response = client.messages.create(
        model=model,
        max_tokens=MAX_TOKENS,
        temperature=TEMPERATURE,
        messages=[{'role': 'user', 'content': prompt}],
    )
    text = review_text(response)
    if not text:
        raise RuntimeError('Model returned an empty review')
    return text


def format_review(review: str, pr: dict, model: str, today: date = None) -> str:
    today = today or date.today()
    header = (
        "# Automated Code Review\n\n"
        f"**PR**: #{pr['number']}\n"
        f"**Author**: @{pr['author']}\n"
        f"**Model**: {model}\n"
        f"**Review Date**: {today.isoformat()}\n\n"
        "---\n\n"
    )
    footer = (
        "\n\n---\n\n"
        "*Automated review generated by Claude. Address Critical issues before merging; "
        "use your own judgment on the rest, and reply here with questions.*\n"
    )
    return header + review + footer


def format_failure(error: Exception) -> str:
    return (
        "# Automated Code Review Failed\n\n"
        f"**Error**: {error}\n\n"
        "The automated code review could not be completed. "
        "Check the workflow logs for details.\n"
    )


def run_review(client, pr: dict, diff_file: Path, files_file: Path,
               output_file: Path, model: str) -> Path:
    """Read the diff, ask for a review and write it to output_file."""
    diff = diff_file.read_text(encoding='utf-8')
    changed_files = [line for line in files_file.read_text(encoding='utf-8').strip().split('\n') if line]

    print(f"PR #{pr['number']}: {pr['title']}")
    print(f"  Author: {pr['author']}")
    print(f"  Changes: +{pr['additions']} -{pr['deletions']}")
    print(f"  Files changed: {len(changed_files)}")
    print("Requesting review...\n")

    prompt = build_prompt(pr, changed_files, truncate_diff(diff))
    review = request_review(client, prompt, model=model)

    output_file.write_text(format_review(review, pr, model), encoding='utf-8')
    print(f"Review saved to {output_file}")
    return output_file


def main(argv=None, client=None):
    parser = argparse.ArgumentParser(description='Generate an AI review for a pull request')
    parser.add_argument('--diff', type=Path, default=DEFAULT_DIFF_FILE, help='Unified diff file')
    parser.add_argument('--files', type=Path, default=DEFAULT_FILES_FILE,
                        help='File listing changed paths, one per line')
    parser.add_argument('--output', type=Path, default=DEFAULT_OUTPUT_FILE,
                        help='Markdown file to write the review to')
    args = parser.parse_args(argv)

    model = os.environ.get('REVIEW_MODEL') or DEFAULT_MODEL

    try:
        if client is None:
            if not os.environ.get('ANTHROPIC_API_KEY'):
                raise RuntimeError('ANTHROPIC_API_KEY environment variable is not set')
            import anthropic
            client = anthropic.Anthropic()

        run_review(client, pr_info_from_env(), args.diff, args.files, args.output, model)
    except Exception as e:
        print(f"Error during code review: {e}", file=sys.stderr)
        args.output.write_text(format_failure(e), encoding='utf-8')
        sys.exit(1)


if __name__ == '__main__':
    main()
