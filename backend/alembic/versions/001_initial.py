"""
Initial migration - ProcessIA

Revision ID: 001
Create Date: 2025-01-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated_at: bool = False) -> list[sa.Column]:
    colunas = [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]
    if updated_at:
        colunas.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False)
        )
    return colunas


def upgrade() -> None:
    # ========================
    # TABELA: user_profiles (id = usuário do serviço de auth)
    # ========================
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(updated_at=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("nome", sa.String(255), nullable=True),
        # ADMIN ou USER
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('ADMIN', 'USER')", name="ck_user_profiles_role"),
    )
    op.create_index("ix_user_profiles_email", "user_profiles", ["email"])

    # ========================
    # TABELA: processos
    # ========================
    op.create_table(
        "processos",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(updated_at=True),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("numero_processo", sa.String(50), nullable=True, comment="Formato CNJ: NNNNNNN-DD.AAAA.J.TR.OOOO"),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="andamento"),
        # Documentos atuais
        sa.Column("defesa", sa.Text(), nullable=True),
        sa.Column("resumo", sa.Text(), nullable=True),
        sa.Column("arquivos_url", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("status IN ('andamento', 'concluido')", name="ck_processos_status"),
    )
    op.create_index("ix_processos_numero_processo", "processos", ["numero_processo"])
    op.create_index("ix_processos_user_id", "processos", ["user_id"])

    # ========================
    # TABELAS: chat
    # ========================
    op.create_table(
        "chat_sessions",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(),
        sa.Column("processo_id", sa.BigInteger(), nullable=False),
        sa.Column("user_uuid", sa.Uuid(), nullable=True),
        sa.Column("nome", sa.String(255), nullable=True),
        sa.Column("instancia_dify", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["processo_id"], ["processos.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_chat_sessions_processo_id", "chat_sessions", ["processo_id"])

    op.create_table(
        "chat_mensagens",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(),
        sa.Column("session_id", sa.BigInteger(), nullable=False),
        sa.Column("pergunta", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["session_id"], ["chat_sessions.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_chat_mensagens_session_id", "chat_mensagens", ["session_id"])

    op.create_table(
        "chat_respostas",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(),
        sa.Column("id_pergunta", sa.BigInteger(), nullable=False),
        sa.Column("resposta", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["id_pergunta"], ["chat_mensagens.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_chat_respostas_id_pergunta", "chat_respostas", ["id_pergunta"])

    # ========================
    # TABELAS: histórico versionado
    # ========================
    op.create_table(
        "defesa_historico",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(),
        sa.Column("processo_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("conteudo", sa.Text(), nullable=False),
        sa.Column("versao", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["processo_id"], ["processos.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("processo_id", "versao", name="uq_defesa_historico_versao"),
    )
    op.create_index("ix_defesa_historico_processo_id", "defesa_historico", ["processo_id"])

    op.create_table(
        "analise_defesa",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(),
        sa.Column("processo_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("conteudo_analise", sa.Text(), nullable=False),
        sa.Column("defesa_analisada", sa.Text(), nullable=True),
        sa.Column("versao", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["processo_id"], ["processos.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("processo_id", "versao", name="uq_analise_defesa_versao"),
    )
    op.create_index("ix_analise_defesa_processo_id", "analise_defesa", ["processo_id"])

    # ========================
    # TABELA: sugestoes_prompts
    # ========================
    op.create_table(
        "sugestoes_prompts",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(updated_at=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("prompt_text", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sugestoes_prompts_user_id", "sugestoes_prompts", ["user_id"])

    # ========================
    # TABELA: audit_logs (append-only)
    # ========================
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        *_timestamps(),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("action_type", sa.String(50), nullable=False),
        sa.Column("resource_type", sa.String(50), nullable=False),
        sa.Column("resource_id", sa.String(100), nullable=True),
        sa.Column("details", postgresql.JSONB(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_action_type", "audit_logs", ["action_type"])

    # ========================
    # FUNÇÕES: próxima versão por processo
    # ========================
    op.execute("""
        CREATE OR REPLACE FUNCTION get_next_defense_version(p_processo_id bigint)
        RETURNS integer
        LANGUAGE plpgsql
        AS $$
        BEGIN
            RETURN COALESCE(
                (SELECT MAX(versao) FROM defesa_historico WHERE processo_id = p_processo_id),
                0
            ) + 1;
        END;
        $$
    """)
    op.execute("""
        CREATE OR REPLACE FUNCTION get_next_analysis_version(p_processo_id bigint)
        RETURNS integer
        LANGUAGE plpgsql
        AS $$
        BEGIN
            RETURN COALESCE(
                (SELECT MAX(versao) FROM analise_defesa WHERE processo_id = p_processo_id),
                0
            ) + 1;
        END;
        $$
    """)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS get_next_analysis_version(bigint)")
    op.execute("DROP FUNCTION IF EXISTS get_next_defense_version(bigint)")

    op.drop_table("audit_logs")
    op.drop_table("sugestoes_prompts")
    op.drop_table("analise_defesa")
    op.drop_table("defesa_historico")
    op.drop_table("chat_respostas")
    op.drop_table("chat_mensagens")
    op.drop_table("chat_sessions")
    op.drop_table("processos")
    op.drop_table("user_profiles")
