"""
Management dashboard: manual scan form and the idea table with generate/view actions.
"""

import html
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.idea import Idea
from services.idea_store import SqlIdeaStore

router = APIRouter()

DASHBOARD_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Idea Factory Dashboard</title>
    <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="p-4 md:p-8 bg-gray-100">
    <div class="max-w-6xl mx-auto bg-white shadow-xl rounded-xl p-6 mb-8">
        <h1 class="text-3xl font-extrabold text-gray-900 mb-4">Idea Factory Dashboard</h1>
        <form id="scan-form" class="flex flex-col md:flex-row gap-3">
            <input type="url" id="scan-url" placeholder="https://example.com" class="flex-grow p-3 border rounded-lg" required>
            <button type="submit" id="scan-button" class="bg-blue-600 text-white font-bold py-3 px-6 rounded-lg">Scan &amp; save</button>
        </form>
        <p id="scan-message" class="mt-3 text-sm text-gray-700"></p>
    </div>
    <div class="max-w-6xl mx-auto bg-white shadow-xl rounded-xl p-6">
        <h2 class="text-2xl font-bold text-gray-900 mb-4">Ideas ({count})</h2>
        <table class="min-w-full divide-y divide-gray-200">
            <thead class="bg-gray-50">
                <tr><th class="px-3 py-3 text-left">ID</th><th class="px-3 py-3 text-left">Competitor / URL</th><th class="px-3 py-3 text-left">Weaknesses</th><th class="px-3 py-3 text-left">Status</th><th class="px-3 py-3 text-left">Action</th></tr>
            </thead>
            <tbody id="ideas-table-body" class="divide-y divide-gray-200">
{rows}
            </tbody>
        </table>
    </div>
    <script>
        async function callApi(path) {{
            const res = await fetch(path, {{ method: path.startsWith('/ideas/') ? 'POST' : 'GET' }});
            const data = await res.json();
            if (!res.ok) throw new Error((data.detail && (data.detail.details || data.detail.error)) || 'Request failed');
            return data;
        }}
        document.getElementById('scan-form').addEventListener('submit', async (event) => {{
            event.preventDefault();
            const message = document.getElementById('scan-message');
            const button = document.getElementById('scan-button');
            button.disabled = true;
            message.textContent = 'Analyzing...';
            try {{
                await callApi('/scan?url=' + encodeURIComponent(document.getElementById('scan-url').value));
                window.location.reload();
            }} catch (e) {{
                message.textContent = 'Failed: ' + e.message;
            }} finally {{
                button.disabled = false;
            }}
        }});
        async function generateLp(id) {{
            if (!confirm('Generate the landing page?')) return;
            try {{
                await callApi('/generate-lp?id=' + encodeURIComponent(id));
                window.location.reload();
            }} catch (e) {{
                alert('Failed: ' + e.message);
            }}
        }}
    </script>
</body>
</html>
"""

EMPTY_ROW = '                <tr><td colspan="5" class="py-4 text-center text-gray-500">No ideas yet</td></tr>'


def _render_row(idea: Idea) -> str:
    idea_id = html.escape(idea.id)
    weaknesses = "".join(f"<li>{html.escape(item)}</li>" for item in (idea.weaknesses or []))
    if idea.is_published:
        status = '<span class="px-2 rounded-full bg-green-100 text-green-800">Published</span>'
        action = f'<a href="/view/{idea_id}" target="_blank" class="text-indigo-600 hover:underline">View LP</a>'
    else:
        status = '<span class="px-2 rounded-full bg-red-100 text-red-800">Not generated</span>'
        action = (
            f'<button onclick="generateLp(\'{idea_id}\')" '
            'class="text-white bg-green-600 hover:bg-green-700 px-3 py-1 rounded text-xs">Generate</button>'
        )
    return (
        "                <tr>"
        f'<td class="px-3 py-2 font-mono text-xs">{idea_id}</td>'
        f'<td class="px-3 py-2"><strong>{html.escape(idea.competitor_name)}</strong><br>'
        f'<span class="text-xs text-gray-500">{html.escape(idea.source_url)}</span></td>'
        f'<td class="px-3 py-2"><ul class="list-disc pl-4 text-xs">{weaknesses}</ul></td>'
        f'<td class="px-3 py-2">{status}</td>'
        f'<td class="px-3 py-2">{action}</td>'
        "</tr>"
    )


def render_dashboard(ideas: List[Idea]) -> str:
    rows = "\n".join(_render_row(idea) for idea in ideas) or EMPTY_ROW
    return DASHBOARD_TEMPLATE.format(count=len(ideas), rows=rows)


@router.get("/", response_class=HTMLResponse)
async def dashboard(db: AsyncSession = Depends(get_db)):
    """Management dashboard listing every idea, newest first."""
    ideas = await SqlIdeaStore(db).list()
    return HTMLResponse(render_dashboard(ideas))
