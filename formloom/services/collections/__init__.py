"""集合命名空间服务."""
