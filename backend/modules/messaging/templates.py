"""WhatsApp message templates (pt-BR)."""


def login_code_message(name: str, code: str, ttl_minutes: int, is_new_user: bool) -> str:
    greeting = (
        "🎉 Bem-vindo(a) à plataforma Estudar.Pro!"
        if is_new_user
        else "👋 Que bom te ver novamente!"
    )
    return (
        "🔐 *Estudar.Pro - Código de Verificação*\n\n"
        f"Olá {name}!\n\n"
        f"Seu código de verificação é: *{code}*\n\n"
        f"⏰ Este código expira em {ttl_minutes} minutos.\n"
        "🔒 Não compartilhe este código com ninguém.\n\n"
        f"{greeting}"
    )


def registration_code_message(name: str, code: str, ttl_minutes: int) -> str:
    return (
        "🎓 *Estudar.Pro - Código de Verificação*\n\n"
        f"Olá {name}!\n\n"
        f"Seu código de verificação é: *{code}*\n\n"
        f"Este código expira em {ttl_minutes} minutos.\n\n"
        "✅ Use este código para completar seu cadastro."
    )


def welcome_message(name: str, is_new_user: bool) -> str:
    if is_new_user:
        return (
            "🎉 *Bem-vindo(a) ao Estudar.Pro!*\n\n"
            f"Olá {name}!\n\n"
            "Sua conta foi criada com sucesso. Agora você tem acesso a:\n\n"
            "📚 Busca inteligente de leis\n"
            "⚖️ Jurisprudência atualizada\n"
            "🎯 Sistema de flashcards\n"
            "📝 Simulados e questões\n"
            "📊 Acompanhamento de progresso\n\n"
            "Bons estudos! 🚀"
        )
    return (
        "✅ *Login realizado com sucesso!*\n\n"
        f"Olá {name}!\n\n"
        "Você está logado no Estudar.Pro.\n"
        "Continue seus estudos de onde parou! 📚⚖️"
    )
