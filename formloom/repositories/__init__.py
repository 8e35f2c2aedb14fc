"""Repository 层: 只负责 Query 组装与数据落库, 不 commit."""
