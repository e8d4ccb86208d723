"""
测试用实体
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    id: int
    name: str
    email: Optional[str] = None


@dataclass
class OrderLine:
    order_id: int
    line_no: int
    product: str
    quantity: int
