"""
Prompts

  code-review  — builds a code review request for the given code
"""

from typing import Any, Dict, List

from toolhub.core import schema
from toolhub.core.context import ServerContext
from toolhub.core.envelope import PromptMessage
from toolhub.core.registry import PromptDescriptor

FOCUS_AREAS = ["performance", "security", "best-practices", "readability", "all"]

REVIEW_TEMPLATE = """Please review the following code, paying particular attention to the points below.

## Review points

### 1. Code quality and readability
- Readability and clarity
- Naming conventions
- Comments and documentation
- Structure and organization

### 2. Performance and optimization
- Algorithmic efficiency
- Unnecessary work or duplicated code
- Memory usage
- Appropriate use of async

### 3. Security
- Input validation and sanitization
- Vulnerabilities (SQL injection, XSS, ...)
- Authentication and authorization
- Handling of sensitive data

### 4. Best practices
- Language idioms and conventions
- Design patterns
- Error handling
- Testability

### 5. Bugs and potential issues
- Logic errors
- Edge cases
- Type safety
- Race conditions and concurrency

## Code to review

```{language}
{code}
```

## Review format

Please structure the review as follows:

### ✅ What is done well
- Specific strengths

### ⚠️ What needs improvement
- Specific issues and why they matter

### 🔧 Suggestions
- Concrete improved code where possible

### 📝 Further considerations
- Anything else worth considering"""

FOCUS_INSTRUCTIONS: Dict[str, str] = {
    "performance": "\n\n**Focus the review on performance optimization.**",
    "security": "\n\n**Focus the review on security vulnerabilities and security best practices.**",
    "best-practices": "\n\n**Focus the review on language best practices and design patterns.**",
    "readability": "\n\n**Focus the review on readability, naming and structure.**",
    "all": "",
}


async def _code_review(ctx: ServerContext, args: Dict[str, Any]) -> List[PromptMessage]:
    text = REVIEW_TEMPLATE.format(
        language=args.get("language") or "text",
        code=args["code"],
    )
    return [PromptMessage("user", text + FOCUS_INSTRUCTIONS[args["focus"]])]


PROMPTS: List[PromptDescriptor] = [
    PromptDescriptor(
        name="code-review",
        title="Code review",
        description="Builds a code review prompt for the given code.",
        argument_shape=schema.Shape({
            "code": schema.string("Code to review"),
            "language": schema.string(
                "Programming language, e.g. typescript, javascript, python",
                required=False,
            ),
            "focus": schema.enum(
                FOCUS_AREAS, "Area to focus the review on (default: all)", default="all"
            ),
        }),
        handler=_code_review,
    ),
]
