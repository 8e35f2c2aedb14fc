"""表单提交服务."""
