"""Motor de execução de fluxos conversacionais.

Interpreta o grafo de blocos e conexões desenhado no editor, mantendo o
progresso de cada conversa entre mensagens recebidas.

Pacotes:
- graph/: modelo do fluxo, configs tipadas e carregamento
- resolver/: escolha da conexão de saída
- matching/: interpretação da resposta do usuário
- schedule/: horário de atendimento
- evaluators/: um avaliador por tipo de bloco
- runner/: orquestração do turno e locks por identidade
- types/: identidade, estado, histórico e resultado do turno
"""
