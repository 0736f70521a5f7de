"""API — camada de borda HTTP.

Responsabilidades:
- Receber requests de execução de fluxo do transporte de mensagens
- Validar payloads
- Converter StepOutcome em resposta HTTP

NÃO PODE conter: avaliação de blocos, regras de estado, persistência.
"""
