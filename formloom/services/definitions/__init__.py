"""定义注册与查询服务."""
