"""Formatting of headers and call lines."""

from __future__ import annotations

from .models import Bucket, Call, Goroutine, Signature
from .palette import Palette
from .paths import PathFormat


def _extra(palette: Palette, signature: Signature, pf: PathFormat) -> str:
    extra = ""
    sleep = signature.sleep_string()
    if sleep:
        extra += f" [{sleep}]"
    if signature.locked:
        extra += " [locked]"
    created_by = pf.created_by_string(signature)
    if created_by:
        extra += f"{palette.created_by} [Created by {created_by}]"
    return extra


def race_string(palette: Palette, goroutine: Goroutine) -> str:
    """Race annotation for a goroutine, empty without a race address."""
    if not goroutine.race_addr:
        return ""
    access = "write" if goroutine.race_write else "read"
    return f"{palette.eol_reset}{palette.race} Race {access} @ 0x{goroutine.race_addr:08x}"


def bucket_header(palette: Palette, bucket: Bucket, pf: PathFormat, multiple: bool) -> str:
    """Header line of a bucket: member count, state and annotations."""
    return (
        f"{palette.routine_color(bucket.first, multiple)}{len(bucket.ids)}: "
        f"{bucket.signature.state}{_extra(palette, bucket.signature, pf)}"
        f"{palette.eol_reset}\n"
    )


def goroutine_header(palette: Palette, goroutine: Goroutine, pf: PathFormat, multiple: bool) -> str:
    """Header line of a single goroutine, including any race annotation."""
    extra = _extra(palette, goroutine.signature, pf) + race_string(palette, goroutine)
    return (
        f"{palette.routine_color(goroutine.first, multiple)}{goroutine.id}: "
        f"{goroutine.signature.state}{extra}"
        f"{palette.eol_reset}\n"
    )


def call_line(palette: Palette, call: Call, src_len: int, pkg_len: int, pf: PathFormat) -> str:
    """One aligned stack frame, without a line terminator."""
    return (
        f"    {palette.package}{call.func.dir_name:<{pkg_len}} "
        f"{palette.src_file}{pf.format_call(call):<{src_len}} "
        f"{palette.function_color(call)}{call.func.name}"
        f"{palette.arguments}({call.args}){palette.eol_reset}"
    )


def stack_lines(palette: Palette, signature: Signature, src_len: int, pkg_len: int, pf: PathFormat) -> str:
    """A complete stack trace without its header."""
    out = [call_line(palette, call, src_len, pkg_len, pf) for call in signature.stack.calls]
    if signature.stack.elided:
        out.append("    (...)")
    return "\n".join(out) + "\n"
