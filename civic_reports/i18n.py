"""
UI translations (Albanian default, English, Italian)
"""
from typing import Dict

LANGUAGES = ("sq", "en", "it")
DEFAULT_LANGUAGE = "sq"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    # Navigation
    "nav.home": {"sq": "Kryefaqja", "en": "Home", "it": "Home"},
    "nav.report": {"sq": "Raporto Problemin", "en": "Report Problem", "it": "Segnala Problema"},
    "nav.track": {"sq": "Kërko Raportim", "en": "Track Report", "it": "Traccia Segnalazione"},
    "nav.stats": {"sq": "Statistika", "en": "Statistics", "it": "Statistiche"},
    "nav.login": {"sq": "Login Admin", "en": "Admin Login", "it": "Login Admin"},
    "nav.logout": {"sq": "Dil", "en": "Sign out", "it": "Esci"},

    # Hero
    "hero.title": {"sq": "Raporto Problemet e Qytetit", "en": "Report City Problems", "it": "Segnala Problemi della Città"},
    "hero.subtitle": {
        "sq": "Platforma digjitale për raportimin e problemeve infrastrukturore dhe mjedisore në Elbasan",
        "en": "Digital platform for reporting infrastructure and environmental issues in Elbasan",
        "it": "Piattaforma digitale per segnalare problemi infrastrutturali e ambientali a Elbasan",
    },
    "hero.cta": {"sq": "Raporto Tani", "en": "Report Now", "it": "Segnala Ora"},
    "hero.track": {"sq": "Kërko Raportim", "en": "Track Report", "it": "Traccia Segnalazione"},

    # Report form
    "report.title": {"sq": "Raporto Problemin", "en": "Report Problem", "it": "Segnala Problema"},
    "report.subtitle": {
        "sq": "Ndihmoni komunitetin duke raportuar problemet në lagje",
        "en": "Help the community by reporting neighborhood problems",
        "it": "Aiuta la comunità segnalando i problemi del quartiere",
    },
    "report.sent": {"sq": "Raporti u Dërgua!", "en": "Report Sent!", "it": "Segnalazione Inviata!"},
    "report.keep_code": {
        "sq": "Ruani këtë kod për të ndjekur statusin:",
        "en": "Keep this code to track the status:",
        "it": "Conserva questo codice per seguire lo stato:",
    },
    "report.new": {"sq": "Raport i Ri", "en": "New Report", "it": "Nuova Segnalazione"},
    "form.title": {"sq": "Titulli", "en": "Title", "it": "Titolo"},
    "form.description": {"sq": "Përshkrimi", "en": "Description", "it": "Descrizione"},
    "form.photo": {"sq": "Foto (opsionale)", "en": "Photo (optional)", "it": "Foto (opzionale)"},
    "form.location": {"sq": "Përfshi vendndodhjen time", "en": "Include my location", "it": "Includi la mia posizione"},
    "form.contact": {"sq": "Informacione kontakti (opsionale)", "en": "Contact information (optional)", "it": "Informazioni di contatto (opzionali)"},
    "form.name": {"sq": "Emër Mbiemër", "en": "Full Name", "it": "Nome Cognome"},
    "form.email": {"sq": "Email", "en": "Email", "it": "Email"},
    "form.phone": {"sq": "Telefon", "en": "Phone", "it": "Telefono"},
    "form.submit": {"sq": "Dërgo Raportin", "en": "Submit Report", "it": "Invia Segnalazione"},
    "form.submitting": {"sq": "Duke dërguar...", "en": "Submitting...", "it": "Invio in corso..."},
    "form.neighborhood": {"sq": "Lagja", "en": "Neighborhood", "it": "Quartiere"},

    # Captcha
    "captcha.title": {"sq": "Verifikimi Anti-Spam", "en": "Anti-spam check", "it": "Verifica anti-spam"},
    "captcha.answer": {"sq": "Përgjigja", "en": "Answer", "it": "Risposta"},

    # Validation and backend errors
    "error.required": {
        "sq": "Ju lutem plotësoni titullin dhe përshkrimin",
        "en": "Please fill in the title and description",
        "it": "Compila il titolo e la descrizione",
    },
    "error.captcha": {
        "sq": "Ju lutem verifikoni që nuk jeni robot",
        "en": "Please verify that you are not a robot",
        "it": "Verifica di non essere un robot",
    },
    "error.location": {
        "sq": "Zgjidhni vendndodhjen në hartë ose çaktivizoni opsionin",
        "en": "Pick a location on the map or turn the option off",
        "it": "Scegli una posizione sulla mappa o disattiva l'opzione",
    },
    "error.photo": {
        "sq": "Fotoja nuk është e vlefshme",
        "en": "The photo is not valid",
        "it": "La foto non è valida",
    },
    "error.submit": {
        "sq": "Gabim gjatë dërgimit. Provoni përsëri.",
        "en": "Could not submit the report. Please try again.",
        "it": "Errore durante l'invio. Riprova.",
    },
    "error.generic": {"sq": "Ndodhi një gabim", "en": "Something went wrong", "it": "Si è verificato un errore"},
    "error.note_required": {
        "sq": "Shkruani përshkrimin e punës së bërë!",
        "en": "Describe the work that was done!",
        "it": "Descrivi il lavoro svolto!",
    },
    "error.login": {
        "sq": "Email ose fjalëkalim i gabuar",
        "en": "Wrong email or password",
        "it": "Email o password errati",
    },
    "error.rating": {"sq": "Ju lutem zgjidhni një vlerësim", "en": "Please choose a rating", "it": "Scegli una valutazione"},
    "error.forbidden": {
        "sq": "Vetëm super adminët mund ta bëjnë këtë",
        "en": "Only super admins can do this",
        "it": "Solo i super admin possono farlo",
    },
    "error.admin_invalid": {
        "sq": "Email i pavlefshëm ose fjalëkalim më i shkurtër se 8 karaktere",
        "en": "Invalid email or password shorter than 8 characters",
        "it": "Email non valida o password più corta di 8 caratteri",
    },
    "error.admin_exists": {
        "sq": "Ky admin ekziston tashmë",
        "en": "This admin already exists",
        "it": "Questo admin esiste già",
    },
    "error.self_delete": {
        "sq": "Nuk mund të fshini veten!",
        "en": "You cannot delete yourself!",
        "it": "Non puoi eliminare te stesso!",
    },

    # Track
    "track.title": {"sq": "Kërko Raportim", "en": "Track Report", "it": "Traccia Segnalazione"},
    "track.subtitle": {
        "sq": "Ndiq statusin e raportimit me kodin unik",
        "en": "Track the status of your report with the unique code",
        "it": "Traccia lo stato della tua segnalazione con il codice univoco",
    },
    "track.placeholder": {"sq": "Shkruaj kodin tuaj", "en": "Enter your code", "it": "Inserisci il tuo codice"},
    "track.notfound": {
        "sq": "Nuk u gjet asnjë raportim me këtë kod.",
        "en": "No report found with this code.",
        "it": "Nessuna segnalazione trovata con questo codice.",
    },
    "track.recent": {"sq": "Raportimet e Fundit", "en": "Recent Reports", "it": "Segnalazioni Recenti"},
    "track.empty": {"sq": "Nuk ka raportim akoma.", "en": "No reports yet.", "it": "Ancora nessuna segnalazione."},
    "track.yours": {"sq": "Raportimi Juaj", "en": "Your Report", "it": "La tua Segnalazione"},
    "track.code": {"sq": "Kodi", "en": "Code", "it": "Codice"},
    "track.note": {"sq": "Shënimi i administratës", "en": "Note from the administration", "it": "Nota dell'amministrazione"},
    "export.title": {"sq": "Eksporto të Dhënat", "en": "Export Data", "it": "Esporta Dati"},

    # Status
    "status.new": {"sq": "I Ri", "en": "New", "it": "Nuovo"},
    "status.in_progress": {"sq": "Në Proces", "en": "In Progress", "it": "In Corso"},
    "status.resolved": {"sq": "Përfunduar", "en": "Resolved", "it": "Risolto"},
    "status.updated": {"sq": "Statusi u përditësua!", "en": "Status updated!", "it": "Stato aggiornato!"},

    # Feedback
    "feedback.title": {"sq": "Vlerëso Zgjidhjen", "en": "Rate the Solution", "it": "Valuta la Soluzione"},
    "feedback.question": {
        "sq": "Sa të kënaqur jeni me zgjidhjen?",
        "en": "How satisfied are you with the solution?",
        "it": "Quanto sei soddisfatto della soluzione?",
    },
    "feedback.comment": {"sq": "Koment shtesë (opsional)", "en": "Additional comment (optional)", "it": "Commento aggiuntivo (opzionale)"},
    "feedback.submit": {"sq": "Dërgo Vlerësimin", "en": "Submit Rating", "it": "Invia Valutazione"},
    "feedback.thanks": {"sq": "Faleminderit për vlerësimin!", "en": "Thank you for your feedback!", "it": "Grazie per la tua valutazione!"},

    # Stats
    "stats.title": {"sq": "Statistika Publike", "en": "Public Statistics", "it": "Statistiche Pubbliche"},
    "stats.subtitle": {
        "sq": "Transparencë në shërbim të qytetarëve",
        "en": "Transparency in service of citizens",
        "it": "Trasparenza al servizio dei cittadini",
    },
    "stats.total": {"sq": "Total Raporte", "en": "Total Reports", "it": "Segnalazioni Totali"},
    "stats.resolved": {"sq": "Të Zgjidhura", "en": "Resolved", "it": "Risolti"},
    "stats.avgtime": {"sq": "Kohë Mesatare", "en": "Average Time", "it": "Tempo Medio"},
    "stats.satisfaction": {"sq": "Kënaqësia", "en": "Satisfaction", "it": "Soddisfazione"},
    "stats.daily": {"sq": "Raportime sipas Ditëve (14 ditë)", "en": "Reports per Day (14 days)", "it": "Segnalazioni per Giorno (14 giorni)"},
    "stats.by_status": {"sq": "Shpërndarja sipas Statusit", "en": "Distribution by Status", "it": "Distribuzione per Stato"},
    "stats.by_neighborhood": {"sq": "Raportime sipas Lagjeve", "en": "Reports by Neighborhood", "it": "Segnalazioni per Quartiere"},
    "stats.no_neighborhood": {"sq": "Pa lagje", "en": "No neighborhood", "it": "Senza quartiere"},
    "stats.with_photo": {"sq": "Me Foto", "en": "With Photo", "it": "Con Foto"},
    "stats.with_location": {"sq": "Me Lokacion", "en": "With Location", "it": "Con Posizione"},

    # GDPR
    "gdpr.title": {"sq": "Privatësia & Cookies", "en": "Privacy & Cookies", "it": "Privacy & Cookie"},
    "gdpr.message": {
        "sq": "Përdorim cookies për të përmirësuar eksperiencën tuaj. Duke vazhduar, pranoni politikën tonë të privatësisë.",
        "en": "We use cookies to improve your experience. By continuing, you accept our privacy policy.",
        "it": "Utilizziamo i cookie per migliorare la tua esperienza. Continuando, accetti la nostra privacy policy.",
    },
    "gdpr.accept": {"sq": "Pranoj", "en": "Accept", "it": "Accetto"},
    "gdpr.decline": {"sq": "Vetëm të nevojshme", "en": "Essential only", "it": "Solo essenziali"},
    "gdpr.privacy": {"sq": "Politika e Privatësisë", "en": "Privacy Policy", "it": "Privacy Policy"},

    # Footer
    "footer.privacy": {"sq": "Privatësia", "en": "Privacy", "it": "Privacy"},
    "footer.rights": {"sq": "Të gjitha të drejtat e rezervuara", "en": "All rights reserved", "it": "Tutti i diritti riservati"},

    # Accessibility and theme
    "a11y.skipnav": {"sq": "Kalo te përmbajtja", "en": "Skip to content", "it": "Vai al contenuto"},
    "a11y.contrast": {"sq": "Kontrast i lartë", "en": "High contrast", "it": "Alto contrasto"},
    "a11y.font_size": {"sq": "Madhësia e shkrimit", "en": "Font size", "it": "Dimensione del testo"},
    "theme.toggle": {"sq": "Ndrysho temën", "en": "Toggle theme", "it": "Cambia tema"},

    # Devices
    "device.camera.open": {"sq": "Hap Kamerën", "en": "Open Camera", "it": "Apri Fotocamera"},
    "device.camera.capture": {"sq": "Bëj Foto", "en": "Take Photo", "it": "Scatta Foto"},
    "device.camera.cancel": {"sq": "Anulo", "en": "Cancel", "it": "Annulla"},
    "device.camera.retry": {"sq": "Provo përsëri", "en": "Try again", "it": "Riprova"},
    "device.camera.permission_denied": {
        "sq": "Leja për kamerën u refuzua. Ju lutem lejoni aksesin e kamerës në cilësimet e shfletuesit.",
        "en": "Camera permission was denied. Please allow camera access in the browser settings.",
        "it": "Permesso fotocamera negato. Consenti l'accesso alla fotocamera nelle impostazioni del browser.",
    },
    "device.camera.not_found": {
        "sq": "Nuk u gjet asnjë kamerë. Sigurohuni që pajisja juaj ka kamerë.",
        "en": "No camera was found. Make sure your device has a camera.",
        "it": "Nessuna fotocamera trovata. Assicurati che il dispositivo ne abbia una.",
    },
    "device.camera.in_use": {
        "sq": "Kamera është në përdorim nga një aplikacion tjetër.",
        "en": "The camera is being used by another application.",
        "it": "La fotocamera è in uso da un'altra applicazione.",
    },
    "device.camera.overconstrained": {
        "sq": "Kamera nuk mbështet konfigurimin e kërkuar.",
        "en": "The camera does not support the requested configuration.",
        "it": "La fotocamera non supporta la configurazione richiesta.",
    },
    "device.camera.unsupported": {
        "sq": "Kamera nuk mbështetet në këtë shfletues. Përdorni Chrome ose Firefox.",
        "en": "The camera is not supported in this browser. Use Chrome or Firefox.",
        "it": "La fotocamera non è supportata in questo browser. Usa Chrome o Firefox.",
    },
    "device.camera.timeout": {
        "sq": "Kamera nuk u përgjigj në kohë.",
        "en": "The camera did not respond in time.",
        "it": "La fotocamera non ha risposto in tempo.",
    },
    "device.camera.capture_failed": {
        "sq": "Gabim gjatë ruajtjes së fotos. Provoni përsëri.",
        "en": "Could not save the photo. Please try again.",
        "it": "Errore nel salvataggio della foto. Riprova.",
    },
    "device.geolocation.permission_denied": {
        "sq": "Leja për vendndodhje u refuzua. Klikoni në hartë për të zgjedhur manualisht.",
        "en": "Location permission was denied. Click on the map to choose manually.",
        "it": "Permesso di posizione negato. Clicca sulla mappa per scegliere manualmente.",
    },
    "device.geolocation.unavailable": {
        "sq": "Vendndodhja nuk është e disponueshme. Klikoni në hartë.",
        "en": "Location is not available. Click on the map.",
        "it": "Posizione non disponibile. Clicca sulla mappa.",
    },
    "device.geolocation.timeout": {
        "sq": "Kërkesa për vendndodhje skadoi. Klikoni në hartë.",
        "en": "The location request timed out. Click on the map.",
        "it": "La richiesta di posizione è scaduta. Clicca sulla mappa.",
    },
    "device.geolocation.unsupported": {
        "sq": "Shfletuesi nuk mbështet vendndodhjen",
        "en": "The browser does not support geolocation",
        "it": "Il browser non supporta la geolocalizzazione",
    },
    "device.geolocation.unknown": {
        "sq": "Gabim i panjohur. Klikoni në hartë.",
        "en": "Unknown error. Click on the map.",
        "it": "Errore sconosciuto. Clicca sulla mappa.",
    },

    # Admin
    "admin.title": {"sq": "Paneli i Administratorit", "en": "Admin Dashboard", "it": "Pannello Amministratore"},
    "admin.reports": {"sq": "Raportet", "en": "Reports", "it": "Segnalazioni"},
    "admin.map": {"sq": "Harta", "en": "Map", "it": "Mappa"},
    "admin.finance": {"sq": "Financat", "en": "Finance", "it": "Finanze"},
    "admin.admins": {"sq": "Adminët", "en": "Admins", "it": "Amministratori"},
    "admin.search": {"sq": "Kërko...", "en": "Search...", "it": "Cerca..."},
    "admin.all": {"sq": "Të Gjitha", "en": "All", "it": "Tutte"},
    "admin.delete_report": {"sq": "Fshi Raportin", "en": "Delete Report", "it": "Elimina Segnalazione"},
    "admin.report_deleted": {"sq": "Raporti u fshi!", "en": "Report deleted!", "it": "Segnalazione eliminata!"},
    "admin.change_status": {"sq": "Ndrysho Statusin:", "en": "Change Status:", "it": "Cambia Stato:"},
    "admin.note_placeholder": {
        "sq": "Përshkruani çfarë është bërë...",
        "en": "Describe what was done...",
        "it": "Descrivi cosa è stato fatto...",
    },
    "admin.add": {"sq": "Shto Admin", "en": "Add Admin", "it": "Aggiungi Admin"},
    "admin.added": {"sq": "Admini u shtua!", "en": "Admin added!", "it": "Admin aggiunto!"},
    "admin.updated": {"sq": "Admini u përditësua!", "en": "Admin updated!", "it": "Admin aggiornato!"},
    "admin.removed": {"sq": "Admini u fshi!", "en": "Admin deleted!", "it": "Admin eliminato!"},
    "admin.welcome": {
        "sq": "Mirësevini në panelin e administratorit!",
        "en": "Welcome to the admin dashboard!",
        "it": "Benvenuto nel pannello di amministrazione!",
    },
    "admin.password": {"sq": "Fjalëkalimi", "en": "Password", "it": "Password"},
    "admin.super": {"sq": "Super Admin", "en": "Super Admin", "it": "Super Admin"},
    "admin.cost_min": {"sq": "Kostoja Minimale", "en": "Minimum Cost", "it": "Costo Minimo"},
    "admin.cost_max": {"sq": "Kostoja Maksimale", "en": "Maximum Cost", "it": "Costo Massimo"},
    "admin.history": {"sq": "Historiku", "en": "History", "it": "Cronologia"},

    # Misc pages
    "notfound.title": {"sq": "Faqja nuk u gjet", "en": "Page not found", "it": "Pagina non trovata"},
    "notfound.back": {"sq": "Kthehu në kryefaqe", "en": "Back to home", "it": "Torna alla home"},
    "privacy.title": {"sq": "Politika e Privatësisë", "en": "Privacy Policy", "it": "Privacy Policy"},
    "privacy.collected": {"sq": "Çfarë mbledhim", "en": "What we collect", "it": "Cosa raccogliamo"},
    "privacy.collected_text": {
        "sq": "Titullin, përshkrimin, foton dhe vendndodhjen e raportit. Emri, emaili dhe telefoni janë opsionalë.",
        "en": "The title, description, photo and location of the report. Name, email and phone are optional.",
        "it": "Titolo, descrizione, foto e posizione della segnalazione. Nome, email e telefono sono facoltativi.",
    },
    "privacy.public": {"sq": "Çfarë është publike", "en": "What is public", "it": "Cosa è pubblico"},
    "privacy.public_text": {
        "sq": "Të dhënat e kontaktit shihen vetëm nga administratorët. Pjesa tjetër e raportit është publike.",
        "en": "Contact details are only visible to administrators. The rest of the report is public.",
        "it": "I dati di contatto sono visibili solo agli amministratori. Il resto della segnalazione è pubblico.",
    },
    "privacy.cookies": {"sq": "Cookies", "en": "Cookies", "it": "Cookie"},
    "privacy.cookies_text": {
        "sq": "Ruajmë në shfletuesin tuaj temën, gjuhën, cilësimet e aksesueshmërisë dhe vlerësimet tuaja.",
        "en": "We keep your theme, language, accessibility settings and ratings in your browser.",
        "it": "Conserviamo nel tuo browser tema, lingua, impostazioni di accessibilità e valutazioni.",
    },
    "privacy.consent_given": {"sq": "Pëlqimi juaj", "en": "Your consent", "it": "Il tuo consenso"},
    "privacy.rights": {"sq": "Të drejtat tuaja", "en": "Your rights", "it": "I tuoi diritti"},
    "privacy.rights_text": {
        "sq": "Mund të eksportoni të dhënat publike të raportit tuaj nga faqja e kërkimit me kodin unik.",
        "en": "You can export the public data of your report from the tracking page with its unique code.",
        "it": "Puoi esportare i dati pubblici della tua segnalazione dalla pagina di tracciamento con il codice univoco.",
    },

    # Extra labels
    "stats.rate": {"sq": "Shkalla e Zgjidhjes", "en": "Resolution Rate", "it": "Tasso di Risoluzione"},
    "track.search": {"sq": "Kërko", "en": "Search", "it": "Cerca"},
    "login.submit": {"sq": "Hyr", "en": "Sign in", "it": "Accedi"},
    "admin.status": {"sq": "Statusi", "en": "Status", "it": "Stato"},
    "admin.created": {"sq": "Krijuar", "en": "Created", "it": "Creato"},
    "admin.category": {"sq": "Kategoria", "en": "Category", "it": "Categoria"},
    "admin.save": {"sq": "Ruaj", "en": "Save", "it": "Salva"},
    "admin.coordinates": {"sq": "Koordinatat", "en": "Coordinates", "it": "Coordinate"},
    "admin.confirm_delete": {"sq": "Jeni i sigurt?", "en": "Are you sure?", "it": "Sei sicuro?"},
}


def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Translate a key, falling back to Albanian and then to the key itself"""
    translation = TRANSLATIONS.get(key)
    if not translation:
        return key
    return translation.get(language) or translation.get(DEFAULT_LANGUAGE) or key
