"""gcal_wrapper: adaptador entre a aplicacao e o Google Calendar.

Subpastas:
- bootstrap/: composition root (logging, construcao do gateway)
- domain/: modelos de evento, estrategias de acesso e regras de ACL
- infra/calendar/: resolver de credenciais, gateway e parsers da API
- protocols/: contratos
- observability/: correlation_id para logs
"""
