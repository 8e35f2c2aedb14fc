"""共享内核: 异常与基础类型."""
