"""Prompt text for document verification."""

from __future__ import annotations

SYSTEM_PROMPT = """You are a strict reviewer of Praxis documents.

Praxis organises knowledge for AI agents into roles, responsibilities,
reference material, conventions and a constitution. Each directory has a
README.md that defines what the documents in it must contain.

Judge a single document against its README. Begin your answer with exactly
one of these words:

- Yes: the document satisfies every requirement of the README.
- Maybe: the document mostly complies but has minor gaps or ambiguities.
- No: the document is missing required frontmatter, sections or content.

After the verdict, list each issue on its own line as a bullet ("- ").
Do not list issues when the answer is Yes. Be concise and specific."""


VALIDATION_QUESTION = """## README SPECIFICATION

The following README defines what documents in this directory should contain.
Use this as your validation criteria:

```markdown
{spec_content}
```

## DOCUMENT TO VALIDATE

File: {file_name}
Directory: {directory}
Detected Type: {document_type}

```markdown
{document_content}
```

## VALIDATION TASK

Does this document comply with the README specification?

Check for:
1. All required frontmatter fields mentioned in the README
2. All required sections mentioned in the README
3. Naming conventions described in the README
4. Content expectations described in the README
5. Proper markdown formatting

Answer Yes, Maybe, or No with specific issues found."""


def build_validation_question(
    *,
    spec_content: str,
    document_content: str,
    file_name: str,
    directory: str,
    document_type: str,
) -> str:
    """Render the user prompt for one document."""
    return VALIDATION_QUESTION.format(
        spec_content=spec_content,
        document_content=document_content,
        file_name=file_name,
        directory=directory,
        document_type=document_type,
    )
