"""App — serviço HTTP e infraestrutura do motor de fluxos.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- infra/: implementações concretas de IO (stores, handoff, relógio)
- protocols/: contratos dos colaboradores do ConversationRunner
- observability/: correlation_id e métricas via logs estruturados

Padrão: flow decide; app executa; api adapta; utils apoia.
"""
