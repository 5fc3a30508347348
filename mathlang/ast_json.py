"""JSON serialization/deserialization for mathlang ASTs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Spans are kept as two-element lists
so that a decoded tree still points into the original source. Number
literals are written as digit strings, since they may be arbitrarily long.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import BinOp, BinaryOp, Cmp, Comparison, Func, Ident, If, Neg, Num, Span
from .types import digits_to_int, int_to_digits


def span_to_obj(span: Span, value: Any) -> Dict[str, Any]:
    return {"value": value, "span": list(span.span)}


def span_from_obj(o: Dict[str, Any], value: Any) -> Span:
    start, end = o["span"]
    return Span(value, (start, end))


def _child(span: Span) -> Dict[str, Any]:
    return span_to_obj(span, ast_to_obj(span.value))


def _from_child(o: Dict[str, Any]) -> Span:
    return span_from_obj(o, ast_from_obj(o["value"]))


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Num):
        return {"type": "Num", "value": span_to_obj(node.value, int_to_digits(node.value.value))}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": span_to_obj(node.name, node.name.value)}
    if isinstance(node, Func):
        obj = {
            "type": "Func",
            "name": span_to_obj(node.name, node.name.value),
            "args": [_child(arg) for arg in node.args],
        }
        if node.arglist is not None:
            obj["arglist"] = list(node.arglist)
        return obj
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "lhs": _child(node.lhs),
            "op": span_to_obj(node.op, node.op.value.value),
            "rhs": _child(node.rhs),
        }
    if isinstance(node, Neg):
        return {"type": "Neg", "operand": _child(node.operand)}
    if isinstance(node, If):
        return {
            "type": "If",
            "cond": _child(node.cond),
            "then": _child(node.then),
            "otherwise": _child(node.otherwise),
        }
    if isinstance(node, Comparison):
        return {
            "type": "Comparison",
            "lhs": _child(node.lhs),
            "op": span_to_obj(node.op, node.op.value.value),
            "rhs": _child(node.rhs),
        }
    raise TypeError(f"Unsupported node type for serialization: {type(node).__name__}")


def ast_from_obj(o: Any) -> Any:
    t = o.get("type")
    if t == "Num":
        return Num(span_from_obj(o["value"], digits_to_int(str(o["value"]["value"]))))
    if t == "Ident":
        return Ident(span_from_obj(o["name"], o["name"]["value"]))
    if t == "Func":
        arglist = tuple(o["arglist"]) if "arglist" in o else None
        return Func(
            span_from_obj(o["name"], o["name"]["value"]),
            tuple(_from_child(a) for a in o.get("args", [])),
            arglist,
        )
    if t == "BinaryOp":
        return BinaryOp(
            _from_child(o["lhs"]),
            span_from_obj(o["op"], BinOp(o["op"]["value"])),
            _from_child(o["rhs"]),
        )
    if t == "Neg":
        return Neg(_from_child(o["operand"]))
    if t == "If":
        return If(_from_child(o["cond"]), _from_child(o["then"]), _from_child(o["otherwise"]))
    if t == "Comparison":
        return Comparison(
            _from_child(o["lhs"]),
            span_from_obj(o["op"], Cmp(o["op"]["value"])),
            _from_child(o["rhs"]),
        )
    raise ValueError(f"Unknown node type in JSON: {t}")
