"""pkgsync - 上游发布清单与本地软件包树的对账报告工具"""

__version__ = "0.1.0"
