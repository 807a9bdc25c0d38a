"""Vercel serverless function for tallying votes."""

import json
import sys
from pathlib import Path

# Add the project root to the path so we can import tallyvotes
sys.path.insert(0, str(Path(__file__).parent.parent))

from tallyvotes.analyze import TallyError, tally_records, tally_sources  # noqa: E402
from tallyvotes.tiebreak import DEFAULT_TIEBREAK  # noqa: E402


def handler(request):
    """Handle incoming requests to tally votes.

    Accepts POST with a JSON body holding either the datasets inline:
        {"contests": [...], "votes": [...], "tiebreak": "lowest-id"}
    or URLs to fetch them from:
        {"contests_url": "https://...", "votes_url": "https://..."}

    Returns JSON with per-contest results and rejected votes.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        data = json.loads(request.body.decode("utf-8"))
        if not isinstance(data, dict):
            return create_response(
                {"error": "Request body must be a JSON object"},
                status=400,
            )
        tiebreak = data.get("tiebreak", DEFAULT_TIEBREAK)

        if "contests" in data and "votes" in data:
            report = tally_records(data["contests"], data["votes"], tiebreak=tiebreak)
        elif data.get("contests_url") and data.get("votes_url"):
            report = tally_sources(
                data["contests_url"], data["votes_url"],
                tiebreak=tiebreak, allow_paths=False)
        else:
            return create_response(
                {"error": "Provide 'contests' and 'votes', "
                          "or 'contests_url' and 'votes_url'"},
                status=400,
            )

        return create_response(report.to_dict())

    except TallyError as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def create_response(body, status: int = 200, headers: dict | None = None) -> dict:
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
