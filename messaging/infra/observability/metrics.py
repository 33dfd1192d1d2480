from prometheus_client import Counter


messages_sent_total = Counter("messaging_messages_sent_total", "Messages sent", ["kind"])
conversation_reports_total = Counter("messaging_conversation_reports_total", "Conversations reported")
