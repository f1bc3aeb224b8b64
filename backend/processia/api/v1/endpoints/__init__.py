"""
Endpoints da API v1.

Módulos disponíveis:
- analises: Análise da defesa
- auditoria: Painel administrativo
- auth: Sessão, perfil e senha
- chats: Chat por processo
- defesa: Defesa e histórico de versões
- health: Health check
- processos: Cadastro de processos e anexos
- resumo: Resumo do processo
- sugestoes: Sugestões de prompt
- usuarios: Gestão de usuários
"""
