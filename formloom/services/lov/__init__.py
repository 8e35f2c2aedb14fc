"""LOV 解析服务."""
