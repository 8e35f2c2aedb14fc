"""字段定义服务."""
