"""
Builders for multipart/form-data bodies used across the test suite.
"""

from typing import Dict, List, Optional


def create_multipart_body(
    boundary: str,
    form_data: Optional[Dict[str, str]] = None,
    files: Optional[List[Dict]] = None,
) -> bytes:
    """
    Create multipart/form-data body for testing file uploads.

    Args:
        boundary: Boundary token for multipart data (without the leading '--')
        form_data: Dict of form field names to values
        files: List of file dicts with keys: name, filename, content, content_type

    Returns:
        Complete multipart body as bytes
    """
    parts = []

    if form_data:
        for name, value in form_data.items():
            part = f"--{boundary}\r\n"
            part += f'Content-Disposition: form-data; name="{name}"\r\n'
            part += "\r\n"
            part += value
            part += "\r\n"
            parts.append(part.encode("utf-8"))

    if files:
        for file in files:
            part = f"--{boundary}\r\n"
            part += f'Content-Disposition: form-data; name="{file["name"]}"; filename="{file["filename"]}"\r\n'
            part += f'Content-Type: {file.get("content_type", "application/octet-stream")}\r\n'
            part += "\r\n"
            parts.append(part.encode("utf-8"))

            content = file["content"]
            if isinstance(content, str):
                content = content.encode("utf-8")
            parts.append(content)
            parts.append(b"\r\n")

    parts.append(f"--{boundary}--\r\n".encode("utf-8"))

    return b"".join(parts)


def create_content_type(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"
