from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from mobiliar.core.exceptions import PersistenciaError
from mobiliar.infrastructure.documentos import GitHubArmazemDocumentos
from mobiliar.infrastructure.repositories import CatalogoDocumentos


class Command(BaseCommand):
    help = 'Publica os dados iniciais do catálogo no armazém de documentos (GitHub)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sobrescrever',
            action='store_true',
            help='Regrava também as coleções que já existem no armazém.',
        )

    def handle(self, *args, **options):
        self.stdout.write('Publicando dados iniciais do catálogo...')

        armazem = GitHubArmazemDocumentos(
            token=settings.GITHUB_TOKEN,
            owner=settings.GITHUB_OWNER,
            repo=settings.GITHUB_REPO,
            branch=settings.GITHUB_BRANCH,
            caminho=settings.GITHUB_DATA_PATH,
        )
        catalogo = CatalogoDocumentos(armazem)

        try:
            gravados = catalogo.inicializar(sobrescrever=options['sobrescrever'])
        except PersistenciaError as e:
            raise CommandError(e.message)

        for arquivo in gravados:
            self.stdout.write(self.style.SUCCESS(f'Publicado "{arquivo}"'))
        if not gravados:
            self.stdout.write('Todas as coleções já existiam; nada a publicar.')

        self.stdout.write(self.style.SUCCESS('Catálogo publicado com sucesso!'))
